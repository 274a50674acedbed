"""
Prompt construction for document summaries.
"""

DEFAULT_MAX_DOCUMENT_CHARS = 15_000
MAX_TITLE_CHARS = 200

SUMMARY_PROMPT_TEMPLATE = (
    "Act as an expert analyst. The document is titled \"{title}\". "
    "Summarize the text into three sections: "
    "Gist (2 sentences, positive tone), "
    "5 Key Points (HTML bullet list using <ul> and <li>), "
    "and Relevance (who needs this document). "
    "Respond ONLY in structured JSON format with the keys "
    "\"gist\", \"keyPoints\" and \"relevance\". "
    "Document Text: {text}"
)

# Longest possible instruction text, i.e. the template with a full-length title
MAX_TEMPLATE_LENGTH = len(SUMMARY_PROMPT_TEMPLATE.format(title="x" * MAX_TITLE_CHARS, text=""))


def truncate_document_text(text: str, max_chars: int = DEFAULT_MAX_DOCUMENT_CHARS) -> str:
    """Keep the first max_chars characters; the rest is discarded."""
    return text[:max_chars]


def build_summary_prompt(
    text: str,
    title: str,
    max_chars: int = DEFAULT_MAX_DOCUMENT_CHARS,
) -> str:
    """
    Build the generation prompt for a document.

    The prompt never exceeds MAX_TEMPLATE_LENGTH + max_chars characters.

    Args:
        text: Extracted document text (any length).
        title: Document title, given to the model as context. Only the
            first MAX_TITLE_CHARS characters are used.
        max_chars: Maximum number of document characters to include.

    Returns:
        The instruction template followed by the truncated document text.
    """
    return SUMMARY_PROMPT_TEMPLATE.format(
        title=title.strip()[:MAX_TITLE_CHARS],
        text=truncate_document_text(text, max_chars),
    )
