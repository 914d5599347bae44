"""Tests for the deterministic rule engine."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pictoboard.models.suggestion import RuleTrigger
from pictoboard.models.word import WordCategory
from pictoboard.suggest.rule_engine import RuleEngine
from pictoboard.suggest.rules import CATEGORY_RULES, GENERIC_FALLBACK_IDS, build_rules


def _ids(words):
    return [word.id for word in words]


def test_pronoun_suggests_conjugated_verbs(words, vocabulary):
    engine = RuleEngine()

    result = engine.suggest([words["yo"]], vocabulary)

    assert _ids(result) == ["quiero", "necesito", "tengo", "puedo", "me_gusta"]


def test_specific_verb_rule_returns_all_followups_in_order(words, vocabulary):
    engine = RuleEngine()

    result = engine.suggest([words["yo"], words["quiero"]], vocabulary)

    assert _ids(result) == ["comer", "beber", "jugar", "dormir", "ir", "agua", "comida"]


def test_specific_rule_wins_over_category_rule(words, vocabulary):
    engine = RuleEngine()

    result = engine.suggest([words["necesito"]], vocabulary)

    assert _ids(result) == ["ayudar", "bano", "agua", "comida", "medicina", "ir"]


def test_category_rule_used_when_no_specific_rule(words, vocabulary):
    engine = RuleEngine()

    assert _ids(engine.suggest([words["feliz"]], vocabulary)) == [
        "ayudar",
        "mama",
        "papa",
        "por_favor",
    ]
    assert _ids(engine.suggest([words["beber"]], vocabulary)) == [
        "agua",
        "comida",
        "bano",
        "mama",
        "papa",
        "amigo",
    ]


def test_empty_sentence_returns_nothing(vocabulary):
    assert RuleEngine().suggest([], vocabulary) == []


def test_generic_fallback_when_no_rule_matches(words, vocabulary):
    engine = RuleEngine()

    assert _ids(engine.suggest([words["rojo"]], vocabulary)) == list(GENERIC_FALLBACK_IDS)
    assert _ids(engine.suggest([words["si"]], vocabulary)) == [
        "yo",
        "quiero",
        "comer",
        "ir",
        "agua",
        "no",
        "por_favor",
    ]


def test_ids_missing_from_vocabulary_are_dropped(words):
    engine = RuleEngine()
    vocabulary = [words["yo"], words["quiero"], words["tengo"]]

    assert _ids(engine.suggest([words["yo"]], vocabulary)) == ["quiero", "tengo"]


def test_exhausted_last_rule_escalates_to_previous_word(make_word):
    necesito = make_word("necesito", WordCategory.VERBOS)
    yo = make_word("yo", WordCategory.PRONOMBRES)
    quiero = make_word("quiero", WordCategory.VERBOS)
    bano = make_word("bano")
    engine = RuleEngine(
        build_rules(
            {
                "quiero": ("yo", "necesito"),
                "yo": ("quiero", "necesito"),
                "necesito": ("bano",),
            },
            {},
        ),
        fallback_ids=("yo", "quiero", "necesito"),
    )

    result = engine.suggest([necesito, yo, quiero], [necesito, yo, quiero, bano])

    assert _ids(result) == ["bano"]


def test_exhausted_rules_fall_back_to_generic_list(make_word):
    yo = make_word("yo", WordCategory.PRONOMBRES)
    quiero = make_word("quiero", WordCategory.VERBOS)
    agua = make_word("agua")
    engine = RuleEngine(build_rules({"yo": ("quiero",), "quiero": ("yo",)}, {}))

    assert _ids(engine.suggest([yo, quiero], [yo, quiero, agua])) == ["agua"]


def test_suggestions_never_repeat_sentence_words(vocabulary):
    engine = RuleEngine()

    for first in vocabulary:
        for second in vocabulary:
            sentence = [first, second]
            used = {first.id, second.id}
            result = engine.suggest(sentence, vocabulary)
            assert not used.intersection(_ids(result)), (first.id, second.id)


def test_phrase_templates_match_sentence_tail(words, vocabulary):
    engine = RuleEngine()

    assert [t.id for t in engine.match_templates([words["yo"], words["quiero"]])] == ["yo_quiero"]
    assert [t.id for t in engine.match_templates([words["tu"], words["puedo"], words["ir"]])] == [
        "puedo_ir"
    ]
    assert engine.match_templates([words["rojo"]]) == []

    fills = engine.template_fills([words["donde_pregunta"]], vocabulary)
    assert _ids(fills) == ["mama", "papa", "bano", "comida", "juguete", "amigo"]


def test_category_table_covers_every_category():
    assert set(CATEGORY_RULES) == set(WordCategory)


@pytest.mark.parametrize(
    "payload",
    [{}, {"word_id": "yo", "category": WordCategory.VERBOS}],
)
def test_rule_trigger_requires_exactly_one_condition(payload):
    with pytest.raises(ValidationError):
        RuleTrigger(**payload)
