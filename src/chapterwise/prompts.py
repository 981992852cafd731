"""Prompt construction for spoiler-bounded answers."""

from string import Formatter

REFUSAL_PHRASE = "I could not find the answer in the provided chapters."

SYSTEM_PROMPT = """You are a careful reading companion. Answer questions about a book \
using ONLY the chapter text supplied by the user. Never use outside knowledge of the book, \
its sequels, or its adaptations, and never reveal or hint at events beyond the chapters \
provided."""

ANSWER_PROMPT = """### Available Chapters:
{context}

### Question:
{question}

### Instructions:
- Answer only from the chapters above.
- The reader has read up to chapter {chapter_limit}. Do not mention or hint at anything \
that happens after chapter {chapter_limit}.
- If the chapters do not contain the answer, reply exactly: "{refusal}"
- Be concise but thorough."""

TEMPLATE_FIELDS = ("context", "question", "chapter_limit", "refusal")
REQUIRED_TEMPLATE_FIELDS = ("context", "question")


def validate_template(template: str) -> str:
    """Check that a custom answer prompt formats cleanly.

    The template must contain {context} and {question}, may contain
    {chapter_limit} and {refusal}, and nothing else in braces. Literal braces
    are written doubled ({{ and }}).

    Raises:
        ValueError: If the template is malformed or uses other fields.
    """
    try:
        fields = {name for _, name, _, _ in Formatter().parse(template) if name is not None}
    except ValueError as e:
        raise ValueError(f"malformed prompt template: {e}") from e

    unknown = sorted(fields - set(TEMPLATE_FIELDS))
    if unknown:
        raise ValueError(
            f"unknown prompt template field(s) {unknown}; allowed: {list(TEMPLATE_FIELDS)} "
            "(write literal braces as {{ and }})"
        )
    missing = [name for name in REQUIRED_TEMPLATE_FIELDS if name not in fields]
    if missing:
        raise ValueError(
            f"prompt template must contain {{context}} and {{question}}, missing {missing}"
        )

    try:
        template.format(context="", question="", chapter_limit=1, refusal="")
    except (ValueError, TypeError) as e:
        raise ValueError(f"malformed prompt template: {e}") from e
    return template


def build_messages(
    context: str,
    question_text: str,
    chapter_limit: int,
    template: str | None = None,
) -> list[dict]:
    """Build the chat messages for one answer request.

    Args:
        context: Rendered chapter context block.
        question_text: The reader's question, inserted verbatim.
        chapter_limit: Last chapter the reader has read.
        template: Optional replacement for ANSWER_PROMPT. Formatted with
                  context, question, chapter_limit and refusal.

    Returns:
        A system message followed by the user message.
    """
    prompt = (template or ANSWER_PROMPT).format(
        context=context,
        question=question_text,
        chapter_limit=chapter_limit,
        refusal=REFUSAL_PHRASE,
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]
