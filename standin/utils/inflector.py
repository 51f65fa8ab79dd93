"""
Inflection helpers.

Collection names are the plural of model type names (``user`` ->
``users``, ``address`` -> ``addresses``). Rules come from the
``inflection`` package (Rails inflector rules).
"""

from __future__ import annotations

from functools import lru_cache

import inflection


@lru_cache(maxsize=512)
def pluralize(word: str) -> str:
    """Return the plural form of ``word``; plural words come back unchanged."""
    return inflection.pluralize(word)


@lru_cache(maxsize=512)
def singularize(word: str) -> str:
    """Return the singular form of ``word``; singular words come back unchanged."""
    return inflection.singularize(word)


def is_singular(word: str) -> bool:
    """
    True when ``word`` is its own singular.

    Uncountable words ("sheep") read as singular.
    """
    return singularize(word) == word
