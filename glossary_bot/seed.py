"""
One-time setup: load a JSON glossary file into MongoDB.

Usage:
    python -m glossary_bot.seed data/glossary.json

The file must hold a single object mapping each term to its definition.
Terms already present (compared case-insensitively) are left untouched.
"""
import argparse
import json
import os
import sys
from typing import Mapping

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from glossary_bot.constants import TERMS_COLLECTION
from glossary_bot.db import connect, ensure_terms_index
from glossary_bot.knowledge import fold
from glossary_bot.logger import logger


def read_glossary_file(path: str) -> dict[str, str]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of term -> definition")

    for term, definition in data.items():
        if not term.strip():
            raise ValueError(f"{path}: empty term")
        if not isinstance(definition, str) or not definition.strip():
            raise ValueError(f"{path}: definition for {term!r} must be a non-empty string")
    return data


def seed_knowledge_base(terms: Collection, glossary: Mapping[str, str]) -> int:
    """
    Insert the glossary, ignoring terms that already exist.

    Returns:
        Number of new terms inserted
    """
    count = 0
    for term, definition in glossary.items():
        term = term.strip()
        try:
            result = terms.update_one(
                {"term_key": fold(term)},
                {"$setOnInsert": {"term": term, "term_key": fold(term), "definition": definition}},
                upsert=True,
            )
        except PyMongoError as e:
            logger.error('Error inserting term "%s": %s', term, e)
            continue
        if result.upserted_id is not None:
            count += 1
        else:
            logger.debug('Term "%s" already exists, skipped', term)
    return count


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Load a glossary JSON file into MongoDB.")
    parser.add_argument("path", help="JSON file mapping terms to definitions")
    parser.add_argument("--mongo-url", default=os.getenv("MONGO_URL"), help="defaults to $MONGO_URL")
    parser.add_argument("--db-name", default=os.getenv("MONGO_DB_NAME"), help="defaults to $MONGO_DB_NAME")
    args = parser.parse_args(argv)

    try:
        glossary = read_glossary_file(args.path)
    except (OSError, ValueError) as e:
        logger.error("Could not read glossary file: %s", e)
        return 1

    try:
        db = connect(args.mongo_url, args.db_name)
    except Exception:
        return 1

    ensure_terms_index(db)
    logger.info("Inserting %s terms from %s...", len(glossary), args.path)
    count = seed_knowledge_base(db[TERMS_COLLECTION], glossary)
    logger.info("Successfully inserted %s new terms.", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
