"""docqa - retrieval-augmented question answering over indexed text documents.

Documents are split into overlapping chunks, embedded with Gemini and stored
in a Qdrant collection. Questions are embedded the same way, the closest
chunks are retrieved and a Gemini model answers from them with numbered
citations.
"""

__version__ = "1.0.0"
