import os

from fm_parsers import parse_feature_model
from kb_metrics import (ConstraintKind, compute_base_statistics, compute_fm_statistics,
    constraint_kind, count_relationships)
from kb_model import KnowledgeBase, conj, disj, feature_model_kb, iff, implies, neg, var
from conftest import MODELS_DIR, SMARTWATCH, make_smartwatch

def fm_statistics(fm):
    return compute_fm_statistics(fm, feature_model_kb(fm).build())

def test_smartwatch_statistics():
    rec = fm_statistics(parse_feature_model(SMARTWATCH))
    assert rec.is_fm
    assert rec.num_variables == 12
    assert rec.num_constraints == 10
    assert rec.num_solver_variables == 12
    assert rec.num_solver_constraints == 23
    assert rec.consistent
    assert rec.ctc_ratio == 0.4
    assert rec.num_features == 12
    assert rec.num_leaf == 9
    assert rec.num_relationships == 6
    assert rec.num_ctc == 4
    assert (rec.num_mandatory, rec.num_optional, rec.num_alternative, rec.num_or) == (2, 2, 1, 1)
    assert (rec.num_requires, rec.num_excludes) == (2, 2)

def test_relationship_and_constraint_invariants():
    for name in ['smartwatch.xml', 'smartwatch.json', 'single.sxfm', 'inconsistent.sxfm']:
        rec = fm_statistics(parse_feature_model(os.path.join(MODELS_DIR, name)))
        assert rec.num_relationships == rec.num_mandatory + rec.num_optional + \
            rec.num_alternative + rec.num_or
        assert rec.num_requires + rec.num_excludes <= rec.num_ctc
        assert rec.num_solver_variables >= rec.num_variables
        assert rec.num_solver_constraints >= rec.num_constraints

def test_glencoe_other_constraint():
    rec = fm_statistics(parse_feature_model(os.path.join(MODELS_DIR, 'smartwatch.json')))
    assert (rec.num_requires, rec.num_excludes, rec.num_ctc) == (2, 1, 4)

def test_inconsistent_model():
    rec = fm_statistics(parse_feature_model(os.path.join(MODELS_DIR, 'inconsistent.sxfm')))
    assert not rec.consistent

def test_undefined_ctc_ratio():
    rec = fm_statistics(parse_feature_model(os.path.join(MODELS_DIR, 'single.sxfm')))
    assert rec.num_constraints == 0
    assert rec.ctc_ratio is None
    assert rec.num_leaf == 1

def test_ctc_ratio_invariant_under_reordering_and_renaming():
    base = fm_statistics(make_smartwatch())
    reordered = make_smartwatch()
    reordered.constraints.reverse()
    renamed = make_smartwatch(prefix='f_')
    assert base.ctc_ratio == 0.4
    assert fm_statistics(reordered).ctc_ratio == base.ctc_ratio
    assert fm_statistics(renamed).ctc_ratio == base.ctc_ratio

def test_count_relationships(smartwatch_fm):
    counts = count_relationships(smartwatch_fm)
    assert sum(counts.values()) == len(smartwatch_fm.relationships)

def test_constraint_kinds():
    a = var('A')
    b = var('B')
    assert constraint_kind(implies(a, b)) == ConstraintKind.REQUIRES
    assert constraint_kind(disj(neg(a), b)) == ConstraintKind.REQUIRES
    assert constraint_kind(disj(b, neg(a))) == ConstraintKind.REQUIRES
    assert constraint_kind(implies(a, neg(b))) == ConstraintKind.EXCLUDES
    assert constraint_kind(disj(neg(a), neg(b))) == ConstraintKind.EXCLUDES
    assert constraint_kind(neg(conj(a, b))) == ConstraintKind.EXCLUDES
    assert constraint_kind(disj(a, b)) == ConstraintKind.OTHER
    assert constraint_kind(iff(a, b)) == ConstraintKind.OTHER
    assert constraint_kind(implies(a, conj(b, var('C')))) == ConstraintKind.OTHER
    assert constraint_kind(disj(neg(a), b, var('C'))) == ConstraintKind.OTHER

def test_base_statistics():
    kb = KnowledgeBase('kb', 'test')
    kb.add_variable('X', ['a', 'b'])
    kb.build()
    rec = compute_base_statistics(kb)
    assert not rec.is_fm
    assert (rec.name, rec.source) == ('kb', 'test')
    assert (rec.num_variables, rec.num_constraints) == (1, 0)
    assert (rec.num_solver_variables, rec.num_solver_constraints) == (2, 2)
    assert rec.consistent
    assert rec.index is None
