from __future__ import annotations

from typing import Callable, Dict, List

from .tokens import Tokens, read_attributes, read_word, skip_whitespace

TAG_INTRODUCERS = frozenset("@\\")

ARGUMENTS_HEADING = "# Arguments"
RETURNS_HEADING = "# Returns"
SEE_ALSO_HEADING = "# See also"
SECTION_HEADINGS = (ARGUMENTS_HEADING, RETURNS_HEADING, SEE_ALSO_HEADING)

REFERENCE_STYLES = ("code", "intra-doc")


class Output:
    def __init__(self):
        self.fragments: List[str] = []

    def emit(self, fragment: str) -> None:
        self.fragments.append(fragment)

    def has_heading(self, heading: str) -> bool:
        return any(fragment.strip() == heading for fragment in self.fragments)

    def ensure_heading(self, heading: str) -> None:
        if not self.has_heading(heading):
            self.emit(heading)
            self.emit("\n\n")

    def render(self) -> str:
        return "".join(self.fragments)


class TagContext:
    """State handed to a tag rule for one dispatch step."""

    def __init__(self, tokens: Tokens, output: Output, introducer: str, tag: str, reference_style: str):
        self.tokens = tokens
        self.output = output
        self.introducer = introducer
        self.tag = tag
        self.reference_style = reference_style

    def word(self) -> str:
        return read_word(self.tokens)

    def reference(self, target: str) -> str:
        return format_reference(target, self.reference_style)


def format_reference(target: str, style: str = "code") -> str:
    if "://" in target:
        return f"[{target}]({target})"
    if style == "intra-doc":
        return f"[`{target}`]"
    return f"`{target}`"


def _param(ctx: TagContext) -> None:
    ctx.output.ensure_heading(ARGUMENTS_HEADING)
    argument = ctx.word()
    annotation = ""
    if not argument:
        attributes = read_attributes(ctx.tokens)
        annotation = f" \\[{attributes}\\]"
        skip_whitespace(ctx.tokens)
        argument = ctx.word()
    ctx.output.emit(f"* `{argument}`{annotation} -")


def _retval(ctx: TagContext) -> None:
    ctx.output.emit(f"* `{ctx.word()}`")


def _code(ctx: TagContext) -> None:
    ctx.output.emit(f"`{ctx.word()}`")


def _ref(ctx: TagContext) -> None:
    ctx.output.emit(ctx.reference(ctx.word()))


def _see(ctx: TagContext) -> None:
    ctx.output.ensure_heading(SEE_ALSO_HEADING)
    ctx.output.emit(f"> {ctx.reference(ctx.word())}")


def _emphasis(ctx: TagContext) -> None:
    ctx.output.emit(f"_{ctx.word()}_")


def _strong(ctx: TagContext) -> None:
    ctx.output.emit(f"**{ctx.word()}**")


def _returns(ctx: TagContext) -> None:
    ctx.output.ensure_heading(RETURNS_HEADING)


def _prefix(markup: str) -> Callable[[TagContext], None]:
    def rule(ctx: TagContext) -> None:
        ctx.output.emit(markup)

    return rule


def _ignore(ctx: TagContext) -> None:
    pass


def _unknown(ctx: TagContext) -> None:
    ctx.output.emit(f"{ctx.introducer}{ctx.tag} ")


TAG_RULES: Dict[str, Callable[[TagContext], None]] = {
    "param": _param,
    "retval": _retval,
    "c": _code,
    "p": _code,
    "ref": _ref,
    "see": _see,
    "sa": _see,
    "a": _emphasis,
    "e": _emphasis,
    "em": _emphasis,
    "b": _strong,
    "note": _prefix("> **Note** "),
    "since": _prefix("> **Since** "),
    "deprecated": _prefix("> **Deprecated** "),
    "remark": _prefix("> "),
    "remarks": _prefix("> "),
    "li": _prefix("- "),
    "par": _prefix("# "),
    "returns": _returns,
    "return": _returns,
    "result": _returns,
    # Grouping is not supported.
    "{": _ignore,
    "}": _ignore,
    "brief": _ignore,
    "short": _ignore,
}


def dispatch_tag(tokens: Tokens, output: Output, introducer: str, reference_style: str = "code") -> None:
    tag = read_word(tokens)
    skip_whitespace(tokens)
    rule = TAG_RULES.get(tag, _unknown)
    rule(TagContext(tokens, output, introducer, tag, reference_style))


def transform(text: str, *, reference_style: str = "code") -> str:
    """Translate one tagged documentation comment into Markdown.

    Raises AttributeListError when a ``@param`` attribute list is malformed;
    nothing is returned for the comment in that case.
    """
    if reference_style not in REFERENCE_STYLES:
        raise ValueError(f"Unknown reference style: {reference_style}")

    tokens = Tokens(text)
    output = Output()
    skip_whitespace(tokens)
    for ch in tokens:
        if ch in TAG_INTRODUCERS:
            dispatch_tag(tokens, output, ch, reference_style)
        elif ch == "\n":
            skip_whitespace(tokens)
            output.emit(ch)
        else:
            output.emit(ch)
    return output.render()
