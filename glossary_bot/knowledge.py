"""
Read-only glossary of terms and their definitions.

The store is built once at startup and never mutated afterwards, so request
handlers can share it without locking.
"""
from typing import Iterable, Mapping

from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from glossary_bot.logger import logger


class KnowledgeBaseUnavailableError(RuntimeError):
    """The glossary could not be loaded; the bot must not start."""


def fold(text: str) -> str:
    return text.casefold()


class KnowledgeStore:
    """
    Immutable term -> definition mapping.

    Terms are unique after case-folding. When duplicates are supplied the first
    one wins and later ones are ignored. Iteration order is the order in which
    entries were supplied.
    """

    def __init__(self, entries: Iterable[tuple[str, str]]):
        seen: set[str] = set()
        kept = []
        for term, definition in entries:
            key = fold(term)
            if key in seen:
                logger.debug("Ignoring duplicate term: %s", term)
                continue
            seen.add(key)
            kept.append((term, definition, key, fold(definition)))
        self._entries = tuple(kept)
        self._definitions = {entry[2]: entry[1] for entry in kept}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "KnowledgeStore":
        return cls(mapping.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return ((term, definition) for term, definition, _, _ in self._entries)

    def list_terms(self) -> list[str]:
        """All terms, sorted ascending ignoring case."""
        return sorted((entry[0] for entry in self._entries), key=fold)

    def find_by_term_substring(self, query: str) -> list[tuple[str, str]]:
        """Entries whose term contains the query (case-insensitive), in store order."""
        needle = fold(query)
        return [
            (term, definition)
            for term, definition, term_key, _ in self._entries
            if needle in term_key
        ]

    def find_by_definition_keywords(self, words: Iterable[str]) -> list[tuple[str, int]]:
        """
        Score each entry by how many distinct words occur in its definition.
        Only entries with a score of at least 1 are returned, in store order.
        """
        needles = list(dict.fromkeys(fold(word) for word in words if word))
        results = []
        for term, _, _, definition_key in self._entries:
            score = sum(1 for needle in needles if needle in definition_key)
            if score:
                results.append((term, score))
        return results

    def get_definition(self, term: str) -> str | None:
        return self._definitions.get(fold(term))


def load_knowledge_base(collection: Collection) -> KnowledgeStore:
    """
    Load every term from MongoDB, in insertion order.

    Raises:
        KnowledgeBaseUnavailableError: if the collection can't be read or is empty
    """
    try:
        documents = list(
            collection.find({}, {"_id": 0, "term": 1, "definition": 1}).sort("_id", ASCENDING)
        )
    except PyMongoError as e:
        logger.critical("Failed to load knowledge base from MongoDB: %s", e)
        raise KnowledgeBaseUnavailableError(f"Could not read the knowledge base: {e}") from e

    entries = [
        (doc["term"], doc["definition"])
        for doc in documents
        if doc.get("term") and doc.get("definition")
    ]
    if len(entries) != len(documents):
        logger.warning("Skipped %s malformed term documents", len(documents) - len(entries))

    if not entries:
        logger.critical("Knowledge base is empty. Run `python -m glossary_bot.seed` first.")
        raise KnowledgeBaseUnavailableError("The knowledge base is empty")

    store = KnowledgeStore(entries)
    logger.info("Loaded %s terms into the knowledge base", len(store))
    return store
