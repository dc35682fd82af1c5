from dataclasses import dataclass, field
from typing import List, Optional

from store.personalities import Personality


@dataclass(frozen=True)
class Container:
    """Inner range [inner_start, inner_end) of one opt-in element."""

    inner_start: int
    inner_end: int


@dataclass(frozen=True)
class LeafSpan:
    """A text-bearing element found inside a container slice."""

    start: int           # relative to the slice that was scanned
    end: int
    tag_name: str
    attrs: str           # raw attribute text including its leading whitespace
    inner_html: str
    plain_text: str


@dataclass
class Edit:
    start: int           # absolute document offsets
    end: int
    tag_name: str
    attrs: str
    original_inner: str
    rewritten_inner: Optional[str] = None

    def render(self) -> str:
        inner = self.original_inner if self.rewritten_inner is None else self.rewritten_inner
        return f"<{self.tag_name}{self.attrs}>{inner}</{self.tag_name}>"


@dataclass
class GenerationRequest:
    main_prompt: str
    personality: Personality
    items: List[str]


@dataclass
class RewriteOutcome:
    html: str
    customized: bool = False
    personality: Optional[Personality] = None
    errors: List[str] = field(default_factory=list)
    provider: Optional[str] = None
    model: Optional[str] = None
