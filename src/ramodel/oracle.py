# src/ramodel/oracle.py

"""
Containment and equivalence of models.

For variable-based relations, containment is plain variable-set inclusion.
For state-based relations that is not enough: two constraint sets over the
same variables may or may not constrain the state space in the same way.
The test used here is degrees of freedom: a relation is implied by a model
when adding it leaves the model's degrees of freedom unchanged.

Degrees of freedom are expensive (a matrix rank over the full state space),
so they are stored as the ``"df"`` attribute on each model and, when a
:class:`~ramodel.cache.ModelCache` is supplied, looked up on and written back
to the cached instance of the same name.
"""

from __future__ import annotations
import logging
import sys

from .dof import ATTRIBUTE_DF, sb_degrees_of_freedom

__all__ = [
    "DF_EPSILON",
    "relation_contained_in",
    "model_contains",
    "models_equivalent",
]

logger = logging.getLogger(__name__)

# Fixed tolerance for comparing degrees of freedom.
DF_EPSILON = sys.float_info.epsilon


def _model_df(model, cache=None) -> float:
    """DF of `model`, from its own attribute, the cache, or computed and stored."""
    df = model.get_attribute(ATTRIBUTE_DF)
    if df >= 0.0:
        return df
    target = model
    if cache is not None:
        found = cache.find_model(model.get_print_name())
        if found is not None:
            logger.debug("cache hit for %s", model.get_print_name())
            target = found
    df = target.get_attribute(ATTRIBUTE_DF)
    if df < 0.0:
        target.complete_sb_model()
        df = sb_degrees_of_freedom(target)
        target.set_attribute(ATTRIBUTE_DF, df)
    return df


def relation_contained_in(model, relation, cache=None) -> bool:
    """
    True when `relation` adds nothing to `model`.

    Parameters
    ----------
    model : Model
        The model to test against; it is never mutated apart from caching its
        ``"df"`` attribute.
    relation : Relation
        Candidate relation.
    cache : ModelCache, optional
        Consulted by print name for previously built models.
    """
    if not (model.is_state_based() or relation.is_state_based()):
        return any(model.get_relation(i).contains(relation) for i in range(model.get_relation_count()))

    for i in range(model.get_relation_count()):
        if model.get_relation(i) is relation:
            return True

    candidate = model.__class__(model.get_relation_count() + 1, config=model.config)
    candidate.copy_relations(model)
    candidate.add_relation(relation, False)

    new_df = _model_df(candidate, cache)
    df = _model_df(model, cache)
    logger.debug(
        "df(%s)=%g, df(%s)=%g", model.get_print_name(), df, candidate.get_print_name(), new_df
    )
    candidate.release()
    return abs(df - new_df) < DF_EPSILON


def model_contains(a, b, cache=None) -> bool:
    """True when every relation of `b` is contained in `a`."""
    for i in range(b.get_relation_count()):
        if not relation_contained_in(a, b.get_relation(i), cache):
            return False
    return True


def models_equivalent(a, b, cache=None) -> bool:
    """
    Equivalence of two models.

    State-based: same object, same name, or mutual containment.
    Variable-based: same object only.
    """
    if a is b:
        return True
    if a.is_state_based() or b.is_state_based():
        if a.get_print_name() == b.get_print_name():
            return True
        return model_contains(a, b, cache) and model_contains(b, a, cache)
    return False
