# Created on: 18 Oct 2026
#
# Statistics of knowledge bases and feature models.
#==============================================================================

import logging
from enum import Enum

from kb_model import FeatureModel, KnowledgeBase, Op, RelationshipType

class ConstraintKind(Enum):
    REQUIRES = 1
    EXCLUDES = 2
    OTHER = 3

# Statistics of one processed knowledge base. index is assigned by the batch
# driver right before the record is written. Feature model statistics stay
# None for plain knowledge bases, ctc_ratio is also None when the knowledge
# base has no constraints.
class StatisticsRecord:
    def __init__(self, name : str, source : str):
        self.index = None
        self.name = name
        self.source = source
        self.num_variables = 0
        self.num_constraints = 0
        self.num_solver_variables = 0
        self.num_solver_constraints = 0
        self.consistent = False
        self.is_fm = False
        self.ctc_ratio = None
        self.num_features = None
        self.num_leaf = None
        self.num_relationships = None
        self.num_ctc = None
        self.num_mandatory = None
        self.num_optional = None
        self.num_alternative = None
        self.num_or = None
        self.num_requires = None
        self.num_excludes = None

def compute_base_statistics(kb : KnowledgeBase):
    rec = StatisticsRecord(kb.name, kb.source)
    rec.num_variables = kb.num_variables
    rec.num_constraints = kb.num_constraints
    rec.num_solver_variables = kb.num_solver_variables
    rec.num_solver_constraints = kb.num_solver_constraints
    rec.consistent = kb.solve()
    return rec

def count_leaves(fm : FeatureModel):
    return len([f for f in fm.features if f.is_leaf()])

def count_relationships(fm : FeatureModel):
    counts = {t : 0 for t in RelationshipType}
    for r in fm.relationships:
        if r.type == RelationshipType.MANDATORY:
            counts[RelationshipType.MANDATORY] += 1
        elif r.type == RelationshipType.OPTIONAL:
            counts[RelationshipType.OPTIONAL] += 1
        elif r.type == RelationshipType.ALTERNATIVE:
            counts[RelationshipType.ALTERNATIVE] += 1
        elif r.type == RelationshipType.OR:
            counts[RelationshipType.OR] += 1
        else:
            raise ValueError('unknown relationship type ' + str(r.type))
    return counts

def is_literal(f):
    return f.op == Op.VAR or (f.op == Op.NOT and f.args[0].op == Op.VAR)

# Cross-tree constraint kind by its shape:
# REQUIRES is A -> B or ~A | B, EXCLUDES is A -> ~B, ~A | ~B or ~(A & B).
def constraint_kind(f):
    if f.op == Op.IMPLIES and f.args[0].op == Op.VAR:
        b = f.args[1]
        if b.op == Op.VAR:
            return ConstraintKind.REQUIRES
        if b.op == Op.NOT and b.args[0].op == Op.VAR:
            return ConstraintKind.EXCLUDES
    if f.op == Op.OR and len(f.args) == 2 and is_literal(f.args[0]) and is_literal(f.args[1]):
        negs = len([a for a in f.args if a.op == Op.NOT])
        if negs == 1:
            return ConstraintKind.REQUIRES
        if negs == 2:
            return ConstraintKind.EXCLUDES
    if f.op == Op.NOT and f.args[0].op == Op.AND:
        args = f.args[0].args
        if len(args) == 2 and args[0].op == Op.VAR and args[1].op == Op.VAR:
            return ConstraintKind.EXCLUDES
    return ConstraintKind.OTHER

def ctc_ratio(fm : FeatureModel, kb : KnowledgeBase):
    if kb.num_constraints == 0:
        logging.warning('CTC ratio of ' + fm.name + ' is undefined: no constraints')
        return None
    return float(len(fm.constraints)) / kb.num_constraints

def compute_fm_statistics(fm : FeatureModel, kb : KnowledgeBase):
    rec = compute_base_statistics(kb)
    rec.is_fm = True
    rec.ctc_ratio = ctc_ratio(fm, kb)
    rec.num_features = len(fm.features)
    rec.num_leaf = count_leaves(fm)
    rec.num_relationships = len(fm.relationships)
    rec.num_ctc = len(fm.constraints)
    counts = count_relationships(fm)
    rec.num_mandatory = counts[RelationshipType.MANDATORY]
    rec.num_optional = counts[RelationshipType.OPTIONAL]
    rec.num_alternative = counts[RelationshipType.ALTERNATIVE]
    rec.num_or = counts[RelationshipType.OR]
    kinds = [constraint_kind(c.formula) for c in fm.constraints]
    rec.num_requires = kinds.count(ConstraintKind.REQUIRES)
    rec.num_excludes = kinds.count(ConstraintKind.EXCLUDES)
    return rec
