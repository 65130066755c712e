"""Prompt templates for grounded answer generation."""

ANSWER_PROMPT_TEMPLATE = """You are a helpful assistant. Answer the question using ONLY the provided context.
If the answer is not found in the context, state that clearly and do not make up information.

Question: {question}

Context:
{context}

Answer with citations (e.g., [1], [2]):"""

CONTEXT_ITEM_SEPARATOR = "\n\n"

NOT_FOUND_ANSWER = (
    "I couldn't find any relevant information in the document store to answer that question."
)
