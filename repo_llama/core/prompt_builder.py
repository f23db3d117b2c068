"""
Grounded prompt template.

Renders the retrieved fragments and the user's question into the single
prompt sent to the generation model.

Dependencies: langchain_core.prompts
System role: Prompt template for grounded answers
"""

from collections.abc import Sequence

from langchain_core.prompts import PromptTemplate

from repo_llama.models.fragment import Fragment

SYSTEM_PROMPT = """You are RepoLlama, a coding assistant helping a developer understand and improve a specific codebase.

## Your role
- Analyze the codebase using ONLY the context snippets provided below.
- Give high-level feedback on architecture, tradeoffs, code quality and possible refactors.
- Clearly separate facts grounded in the snippets from general engineering knowledge.

## Grounding rules
1. Treat the provided context as the only source of truth about this repository.
2. Every fact about the codebase must be supported by the context. Name the file you used, e.g. "In [src/db/client.ts], ...". Do not invent line numbers.
3. If the context is not enough, say: "Based on the context provided, I'm not sure."
4. Ideas that go beyond the context must be labelled "Suggestion", "Possible improvement" or "Architectural option".

## Answer formatting
- Small talk: be polite, introduce yourself briefly, ask how you can help. No headers.
- Simple factual question: answer directly and concisely.
- Analysis or review: use the sections "## Summary", "## What the Code Does", "## Architecture & Design", "## Tradeoffs & Observations", "## Suggestions / Improvements" and optionally "## Code Example".
- Always leave a blank line between paragraphs, sections and list items, and never put text on the same line as a header."""

GROUNDED_PROMPT = PromptTemplate.from_template(
    SYSTEM_PROMPT
    + """

## Context (Sources of Truth)
{context}

## User Question
{question}

## Answer:"""
)


def format_context(fragments: Sequence[Fragment]) -> str:
    """Render fragments as `File:`/`Content:` blocks separated by blank lines."""
    return "\n\n".join(
        f"File: {fragment.source}\nContent:\n{fragment.text}" for fragment in fragments
    )


def build_prompt(question: str, fragments: Sequence[Fragment]) -> str:
    """
    Build the grounded prompt for one question.

    Args:
        question: The user's question
        fragments: Top-ranked fragments, best first

    Returns:
        str: Prompt text ready for the generation service
    """
    return GROUNDED_PROMPT.format(context=format_context(fragments), question=question)
