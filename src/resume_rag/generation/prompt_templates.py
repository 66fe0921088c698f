"""All prompt templates for the résumé chatbot."""

from __future__ import annotations


def strip_prompt_indent(prompt: str) -> str:
    """Drop indentation and blank lines so templates can be written indented."""
    return "\n".join(line.strip() for line in prompt.splitlines() if line.strip())


QUESTION_REFINEMENT_PROMPT = strip_prompt_indent(
    """
    Rewrite the following question so that it retrieves information about a {role}'s
    resume from a vector store more effectively.

    **Rules**
    - Keep the core intent and context of the original question.
    - Include keywords and context that help vector search.
    - Do not change the kind of question (technical skills, experience, capabilities, etc.).
    - Return only the improved question, without any explanation.
    - Use plain words only; do not include special characters such as / * $ # &.

    Original question: {question}

    Improved question:
    """
)

ANSWER_PROMPT = strip_prompt_indent(
    """
    You are an AI assistant that answers questions based on {name}'s resume.

    **Rules**
    - Understand and answer every question as if you were {name}, speaking in the first person.
    - Make the most of the provided documents to give accurate and helpful answers.
    - Avoid answers that do not fit the context, and keep your answers consistent.
    - Use Markdown wherever possible (use bullets for lists).
    - For information that is not in the documents, answer exactly: "{refusal}"
    - Always answer in complete, grammatically correct sentences.
    - Always use a polite tone.
    - Leave out information that is not directly related to the question.

    Related documents:
    {context}

    Question: {question}

    Answer:
    """
)


def render_answer_prompt(
    context: str, question: str, name: str, refusal: str
) -> str:
    """Fill the answer template in one pass; every value is inserted verbatim."""
    return ANSWER_PROMPT.format(context=context, question=question, name=name, refusal=refusal)
