"""Static grammar rules and phrase templates backing the rule engine."""

from __future__ import annotations

from typing import Dict, Mapping, Sequence, Tuple

from pictoboard.models.suggestion import PhraseTemplate, RuleTrigger, SuggestionRule
from pictoboard.models.word import WordCategory

GENERIC_FALLBACK_IDS: Tuple[str, ...] = (
    "yo",
    "quiero",
    "comer",
    "ir",
    "agua",
    "si",
    "no",
    "por_favor",
)

_WANT_FOLLOWUPS = ("comer", "beber", "jugar", "dormir", "ir", "agua", "comida")
_NEED_FOLLOWUPS = ("ayudar", "bano", "agua", "comida", "medicina", "ir")
_HAVE_FOLLOWUPS = ("hambre", "sed", "frio_emocion", "calor")
_CAN_FOLLOWUPS = ("ir", "jugar", "comer", "beber", "hablar", "ver")
_LIKE_FOLLOWUPS = ("comer", "jugar", "musica", "comida", "pelota")

# Keyed by the id of the word that triggers the rule. Pronouns lead to verbs
# conjugated for that person; conjugated verbs lead to objects and actions.
WORD_RULES: Dict[str, Tuple[str, ...]] = {
    "yo": ("quiero", "necesito", "tengo", "puedo", "me_gusta"),
    "tu": ("quieres", "necesitas", "tienes", "puedes", "te_gusta"),
    "el": ("quiere", "necesita", "tiene", "puede", "le_gusta"),
    "ella": ("quiere", "necesita", "tiene", "puede", "le_gusta"),
    "nosotros": ("queremos", "necesitamos", "tenemos", "podemos", "nos_gusta"),
    "ellos": ("quieren", "necesitan", "tienen", "pueden", "les_gusta"),
    "quiero": _WANT_FOLLOWUPS,
    "quieres": _WANT_FOLLOWUPS,
    "quiere": _WANT_FOLLOWUPS,
    "queremos": _WANT_FOLLOWUPS,
    "quieren": _WANT_FOLLOWUPS,
    "necesito": _NEED_FOLLOWUPS,
    "necesitas": _NEED_FOLLOWUPS,
    "necesita": _NEED_FOLLOWUPS,
    "necesitamos": _NEED_FOLLOWUPS,
    "necesitan": _NEED_FOLLOWUPS,
    "tengo": _HAVE_FOLLOWUPS + ("me_duele",),
    "tienes": _HAVE_FOLLOWUPS,
    "tiene": _HAVE_FOLLOWUPS,
    "tenemos": _HAVE_FOLLOWUPS,
    "tienen": _HAVE_FOLLOWUPS,
    "puedo": _CAN_FOLLOWUPS,
    "puedes": _CAN_FOLLOWUPS,
    "puede": _CAN_FOLLOWUPS,
    "podemos": _CAN_FOLLOWUPS,
    "pueden": _CAN_FOLLOWUPS,
    "me_gusta": _LIKE_FOLLOWUPS,
    "te_gusta": _LIKE_FOLLOWUPS,
    "le_gusta": _LIKE_FOLLOWUPS,
    "nos_gusta": _LIKE_FOLLOWUPS,
    "les_gusta": _LIKE_FOLLOWUPS,
    "donde_pregunta": ("mama", "papa", "bano", "comida", "juguete"),
    "que_pregunta": ("quiero", "comer", "comida", "jugar"),
    "cuando_pregunta": ("comer", "jugar", "ir", "dormir"),
    "por_que": ("no", "si", "triste", "enojado"),
}

# Every category must appear here; an empty tuple means "no category rule".
CATEGORY_RULES: Dict[WordCategory, Tuple[str, ...]] = {
    WordCategory.VERBOS: ("agua", "comida", "bano", "mama", "papa", "amigo"),
    WordCategory.EMOCIONES: ("ayudar", "mama", "papa", "por_favor"),
    WordCategory.SUSTANTIVOS: (),
    WordCategory.ADJETIVOS: (),
    WordCategory.PRONOMBRES: (),
    WordCategory.PREGUNTAS: (),
    WordCategory.SOCIALES: (),
    WordCategory.NUMEROS: (),
    WordCategory.COLORES: (),
    WordCategory.TIEMPO: (),
}

_missing_categories = set(WordCategory) - set(CATEGORY_RULES)
if _missing_categories:  # pragma: no cover - import-time table check
    raise RuntimeError(
        "CATEGORY_RULES is missing entries for: "
        + ", ".join(sorted(category.value for category in _missing_categories))
    )


PHRASE_TEMPLATES: Tuple[PhraseTemplate, ...] = (
    PhraseTemplate(
        id="yo_quiero",
        label="Yo quiero ___",
        prefix_word_ids=("yo", "quiero"),
        slot_hint="comida, jugar, ir...",
        suggested_fill_ids=_WANT_FOLLOWUPS,
    ),
    PhraseTemplate(
        id="necesito",
        label="Necesito ___",
        prefix_word_ids=("necesito",),
        slot_hint="ayuda, bano, agua...",
        suggested_fill_ids=("ayudar", "bano", "agua", "comida", "medicina"),
    ),
    PhraseTemplate(
        id="donde_esta",
        label="Donde esta ___?",
        prefix_word_ids=("donde_pregunta",),
        slot_hint="mama, bano, comida...",
        suggested_fill_ids=("mama", "papa", "bano", "comida", "juguete", "amigo"),
    ),
    PhraseTemplate(
        id="me_duele",
        label="Me duele ___",
        prefix_word_ids=("me_duele",),
        slot_hint="cabeza, estomago...",
        suggested_fill_ids=("cabeza", "estomago", "mano", "pie"),
    ),
    PhraseTemplate(
        id="puedo_ir",
        label="Puedo ir ___?",
        prefix_word_ids=("puedo", "ir"),
        slot_hint="bano, recreo...",
        suggested_fill_ids=("bano", "recreo", "cocina_lugar", "sala"),
    ),
    PhraseTemplate(
        id="quiero_ir",
        label="Quiero ir ___",
        prefix_word_ids=("quiero", "ir"),
        slot_hint="casa, escuela...",
        suggested_fill_ids=("bano", "recreo", "cocina_lugar", "sala"),
    ),
)


def build_rules(
    word_rules: Mapping[str, Sequence[str]] = WORD_RULES,
    category_rules: Mapping[WordCategory, Sequence[str]] = CATEGORY_RULES,
) -> Tuple[SuggestionRule, ...]:
    """Flatten the rule tables into ``SuggestionRule`` records (word rules first)."""

    rules = [
        SuggestionRule(trigger=RuleTrigger(word_id=word_id), suggested_word_ids=tuple(ids))
        for word_id, ids in word_rules.items()
    ]
    rules.extend(
        SuggestionRule(trigger=RuleTrigger(category=category), suggested_word_ids=tuple(ids))
        for category, ids in category_rules.items()
        if ids
    )
    return tuple(rules)


SUGGESTION_RULES: Tuple[SuggestionRule, ...] = build_rules()


__all__ = [
    "CATEGORY_RULES",
    "GENERIC_FALLBACK_IDS",
    "PHRASE_TEMPLATES",
    "SUGGESTION_RULES",
    "WORD_RULES",
    "build_rules",
]
