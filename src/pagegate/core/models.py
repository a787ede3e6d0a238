"""pagegate data models — Pydantic v2.

This module is a leaf: no internal project imports.
All Enum and Model definitions live here.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ============================================================
# Enums
# ============================================================


class LocatorStrategy(StrEnum):
    """How a locator finds its element."""

    ID = "id"
    CSS = "css"
    XPATH = "xpath"
    CLASS_NAME = "class_name"
    NAME = "name"
    TEXT = "text"
    TEST_ID = "test_id"
    PLACEHOLDER = "placeholder"


class EvalState(StrEnum):
    """Result of a single condition check."""

    SATISFIED = "satisfied"
    NOT_YET = "not_yet"
    TARGET_ABSENT = "target_absent"


class GateState(StrEnum):
    """Readiness gate lifecycle."""

    NOT_LOADED = "not_loaded"
    LOADED = "loaded"
    DEGRADED = "degraded"


# ============================================================
# Locator
# ============================================================


class Locator(BaseModel):
    """Immutable descriptor of how to find one UI node."""

    model_config = ConfigDict(frozen=True)

    strategy: LocatorStrategy
    value: str = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def expand_shorthand(cls, data: Any) -> Any:
        """Accept ``{id: user-name}`` as well as ``{strategy: id, value: user-name}``."""
        if isinstance(data, dict) and len(data) == 1:
            key, value = next(iter(data.items()))
            if key in {s.value for s in LocatorStrategy}:
                return {"strategy": key, "value": value}
        return data

    def __str__(self) -> str:
        return f"{self.strategy}={self.value}"

    @classmethod
    def by_id(cls, value: str) -> Locator:
        return cls(strategy=LocatorStrategy.ID, value=value)

    @classmethod
    def css(cls, value: str) -> Locator:
        return cls(strategy=LocatorStrategy.CSS, value=value)

    @classmethod
    def xpath(cls, value: str) -> Locator:
        return cls(strategy=LocatorStrategy.XPATH, value=value)

    @classmethod
    def class_name(cls, value: str) -> Locator:
        return cls(strategy=LocatorStrategy.CLASS_NAME, value=value)


# ============================================================
# Conditions
# ============================================================


class _ConditionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Surface conditions (title, URL) are checked without a locator.
    needs_locator: ClassVar[bool] = True
    # Absence conditions treat a missing element as success.
    expects_absence: ClassVar[bool] = False

    def describe(self) -> str:
        return str(getattr(self, "kind", type(self).__name__))


class Visible(_ConditionBase):
    kind: Literal["visible"] = "visible"


class Clickable(_ConditionBase):
    """Visible and enabled."""

    kind: Literal["clickable"] = "clickable"


class Enabled(_ConditionBase):
    """Accepts interaction, visible or not."""

    kind: Literal["enabled"] = "enabled"


class Present(_ConditionBase):
    """Attached to the document, visible or not."""

    kind: Literal["present"] = "present"


class Invisible(_ConditionBase):
    """Hidden or gone."""

    kind: Literal["invisible"] = "invisible"
    expects_absence: ClassVar[bool] = True


class AttributeEquals(_ConditionBase):
    kind: Literal["attribute_equals"] = "attribute_equals"
    name: str
    value: str

    def describe(self) -> str:
        return f"attribute {self.name!r} == {self.value!r}"


class AttributePresent(_ConditionBase):
    kind: Literal["attribute_present"] = "attribute_present"
    name: str

    def describe(self) -> str:
        return f"carrying attribute {self.name!r}"


class TextContains(_ConditionBase):
    kind: Literal["text_contains"] = "text_contains"
    text: str

    def describe(self) -> str:
        return f"containing text {self.text!r}"


class TextEquals(_ConditionBase):
    kind: Literal["text_equals"] = "text_equals"
    text: str

    def describe(self) -> str:
        return f"with text {self.text!r}"


class TitleEquals(_ConditionBase):
    kind: Literal["title_equals"] = "title_equals"
    needs_locator: ClassVar[bool] = False
    title: str

    def describe(self) -> str:
        return f"page title == {self.title!r}"


class UrlEquals(_ConditionBase):
    kind: Literal["url_equals"] = "url_equals"
    needs_locator: ClassVar[bool] = False
    url: str

    def describe(self) -> str:
        return f"page URL == {self.url!r}"


class UrlContains(_ConditionBase):
    kind: Literal["url_contains"] = "url_contains"
    needs_locator: ClassVar[bool] = False
    fragment: str

    def describe(self) -> str:
        return f"page URL containing {self.fragment!r}"


Condition = Annotated[
    Union[
        Visible,
        Clickable,
        Enabled,
        Present,
        Invisible,
        AttributeEquals,
        AttributePresent,
        TextContains,
        TextEquals,
        TitleEquals,
        UrlEquals,
        UrlContains,
    ],
    Field(discriminator="kind"),
]


def _coerce_condition(value: Any) -> Any:
    """Allow a bare kind string (``"visible"``) where a condition is expected."""
    if isinstance(value, str):
        return {"kind": value}
    return value


# ============================================================
# Wait / Result Models
# ============================================================


class WaitSpec(BaseModel):
    """Timeout and polling cadence for one bounded wait."""

    model_config = ConfigDict(frozen=True)

    timeout_ms: int = Field(default=10000, gt=0)
    poll_interval_ms: int = Field(default=500, gt=0)

    @model_validator(mode="after")
    def interval_below_timeout(self) -> WaitSpec:
        if self.poll_interval_ms >= self.timeout_ms:
            msg = (
                f"poll_interval_ms ({self.poll_interval_ms}) must be smaller "
                f"than timeout_ms ({self.timeout_ms})"
            )
            raise ValueError(msg)
        return self

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000

    @property
    def poll_interval_s(self) -> float:
        return self.poll_interval_ms / 1000


class WaitResult(BaseModel):
    """Outcome of a bounded wait."""

    satisfied: bool
    state: EvalState
    elapsed_ms: int = Field(default=0, ge=0)
    polls: int = Field(default=0, ge=0)


class ProbeResult(BaseModel):
    """Outcome of a non-throwing read. ``value`` is empty when nothing was found."""

    found: bool = False
    value: str = ""


class Requirement(BaseModel):
    """One (locator, condition) pair of a readiness gate."""

    model_config = ConfigDict(frozen=True)

    locator: Locator | None = None
    condition: Condition

    @field_validator("condition", mode="before")
    @classmethod
    def condition_shorthand(cls, value: Any) -> Any:
        return _coerce_condition(value)

    @model_validator(mode="after")
    def locator_matches_condition(self) -> Requirement:
        if self.condition.needs_locator and self.locator is None:
            msg = f"Condition '{self.condition.describe()}' needs a locator"
            raise ValueError(msg)
        if not self.condition.needs_locator and self.locator is not None:
            msg = f"Condition '{self.condition.describe()}' does not take a locator"
            raise ValueError(msg)
        return self

    def describe(self) -> str:
        if self.locator is None:
            return self.condition.describe()
        return f"{self.locator} {self.condition.describe()}"


# ============================================================
# Page Definition Models
# ============================================================


class ReadyEntry(BaseModel):
    """Readiness entry as written in a page definition (element by name)."""

    element: str | None = None
    condition: Condition = Field(default_factory=Visible)

    @field_validator("condition", mode="before")
    @classmethod
    def condition_shorthand(cls, value: Any) -> Any:
        return _coerce_condition(value)


class PageDefinition(BaseModel):
    """Per-page table of locators plus the conditions that mean 'this page is showing'."""

    name: str = Field(min_length=1)
    url: str = Field(default="")
    title: str | None = None
    wait: WaitSpec | None = None
    elements: dict[str, Locator] = Field(default_factory=dict)
    ready: list[ReadyEntry] = Field(default_factory=list)
    variables: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def ready_entries_resolve(self) -> PageDefinition:
        if not self.ready and self.title is None:
            msg = f"Page '{self.name}' needs at least one ready entry or a title"
            raise ValueError(msg)
        for entry in self.ready:
            if entry.element is None:
                if entry.condition.needs_locator:
                    msg = f"Ready entry '{entry.condition.describe()}' needs an element"
                    raise ValueError(msg)
            elif entry.element not in self.elements:
                msg = f"Ready entry references unknown element '{entry.element}'"
                raise ValueError(msg)
            elif not entry.condition.needs_locator:
                msg = (
                    f"Ready entry '{entry.condition.describe()}' checks the page, "
                    f"not element '{entry.element}'"
                )
                raise ValueError(msg)
        return self

    def requirements(self) -> list[Requirement]:
        """Ready entries resolved to requirements, title check last."""
        result = [
            Requirement(
                locator=self.elements[entry.element] if entry.element else None,
                condition=entry.condition,
            )
            for entry in self.ready
        ]
        if self.title is not None:
            result.append(Requirement(condition=TitleEquals(title=self.title)))
        return result


# ============================================================
# Config Models
# ============================================================


class DriverConfig(BaseModel):
    """Browser driver configuration."""

    type: str = Field(default="playwright", description="Driver type: playwright")
    browser: str = Field(
        default="chromium",
        description="Browser: chromium | firefox | webkit",
    )
    headless: bool = Field(default=True)
    viewport_width: int = Field(default=1280, ge=320, le=3840)
    viewport_height: int = Field(default=720, ge=240, le=2160)
    action_timeout_ms: int = Field(default=5000, ge=100, le=120000)


class Config(BaseSettings):
    """Project configuration. Merged from YAML + env var + CLI flag."""

    model_config = SettingsConfigDict(
        env_prefix="PAGEGATE_",
        env_nested_delimiter="__",
    )

    base_url: str = Field(default="")
    pages_dir: str = Field(default="pages")
    wait: WaitSpec = Field(default_factory=WaitSpec)
    driver: DriverConfig = Field(default_factory=DriverConfig)
