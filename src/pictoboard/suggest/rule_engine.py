"""Deterministic grammar-aware next-word rule engine."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from pictoboard.models.suggestion import PhraseTemplate, SuggestionRule
from pictoboard.models.word import Word, WordCategory

from .rules import GENERIC_FALLBACK_IDS, PHRASE_TEMPLATES, SUGGESTION_RULES


def build_vocabulary_index(vocabulary: Iterable[Word]) -> Dict[str, Word]:
    """Index vocabulary words by id (first occurrence wins)."""

    index: Dict[str, Word] = {}
    for word in vocabulary:
        index.setdefault(word.id, word)
    return index


def resolve_word_ids(
    word_ids: Iterable[str],
    vocabulary_index: Mapping[str, Word],
    used_ids: Iterable[str],
) -> List[Word]:
    """Map ids to words, dropping unknown ids and ids already in the sentence."""

    used = set(used_ids)
    resolved: List[Word] = []
    for word_id in word_ids:
        if word_id in used:
            continue
        word = vocabulary_index.get(word_id)
        if word is None:
            continue
        resolved.append(word)
    return resolved


class RuleEngine:
    """Suggest next words from the tail of the sentence.

    The engine walks the sentence from the last word backwards. For each word
    it prefers a rule keyed by the word id over a rule keyed by its category;
    the first rule that still yields unused, known words wins. When no word
    produces anything the generic fallback list is used instead.
    """

    def __init__(
        self,
        rules: Sequence[SuggestionRule] = SUGGESTION_RULES,
        *,
        fallback_ids: Sequence[str] = GENERIC_FALLBACK_IDS,
        templates: Sequence[PhraseTemplate] = PHRASE_TEMPLATES,
    ) -> None:
        self._word_rules: Dict[str, SuggestionRule] = {}
        self._category_rules: Dict[WordCategory, SuggestionRule] = {}
        for rule in rules:
            if rule.trigger.word_id is not None:
                self._word_rules.setdefault(rule.trigger.word_id, rule)
            elif rule.trigger.category is not None:
                self._category_rules.setdefault(rule.trigger.category, rule)
        self._fallback_ids = tuple(fallback_ids)
        self._templates = sorted(templates, key=lambda tpl: len(tpl.prefix_word_ids), reverse=True)

    def rule_for(self, word: Word) -> Optional[SuggestionRule]:
        """Return the specific rule for ``word``, else its category rule."""

        specific = self._word_rules.get(word.id)
        if specific is not None:
            return specific
        return self._category_rules.get(word.category)

    def suggest(self, sentence_words: Sequence[Word], vocabulary: Iterable[Word]) -> List[Word]:
        if not sentence_words:
            return []

        index = build_vocabulary_index(vocabulary)
        used_ids = {word.id for word in sentence_words}

        for word in reversed(sentence_words):
            rule = self.rule_for(word)
            if rule is None:
                continue
            resolved = resolve_word_ids(rule.suggested_word_ids, index, used_ids)
            if resolved:
                return resolved

        return resolve_word_ids(self._fallback_ids, index, used_ids)

    def match_templates(self, sentence_words: Sequence[Word]) -> List[PhraseTemplate]:
        """Return templates whose prefix equals the sentence tail, longest prefix first."""

        ids = tuple(word.id for word in sentence_words)
        matches: List[PhraseTemplate] = []
        for template in self._templates:
            size = len(template.prefix_word_ids)
            if size and len(ids) >= size and ids[-size:] == template.prefix_word_ids:
                matches.append(template)
        return matches

    def template_fills(
        self,
        sentence_words: Sequence[Word],
        vocabulary: Iterable[Word],
    ) -> List[Word]:
        """Resolve the slot fills of every matching template, without duplicates."""

        templates = self.match_templates(sentence_words)
        if not templates:
            return []
        index = build_vocabulary_index(vocabulary)
        used_ids = {word.id for word in sentence_words}
        fills: List[Word] = []
        for template in templates:
            for word in resolve_word_ids(template.suggested_fill_ids, index, used_ids):
                fills.append(word)
                used_ids.add(word.id)
        return fills


__all__ = ["RuleEngine", "build_vocabulary_index", "resolve_word_ids"]
