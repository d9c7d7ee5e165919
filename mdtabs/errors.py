"""Error hierarchy for mdtabs."""


class MdTabsError(Exception):
    """Base for all mdtabs errors."""


class RenderError(MdTabsError):
    """Base for failures while turning Markdown into HTML.

    These never leave the renderer; they are folded into a failed RenderResult.
    """


class ParseFailure(RenderError):
    """The Markdown source cannot be parsed (e.g. nesting beyond the limit)."""


class InternalRenderFault(RenderError):
    """Any other unexpected failure inside the Markdown library or serializer."""
