# Created on: 18 Oct 2026
#
# Canonical in-memory view of knowledge bases: flat CSP knowledge bases
# (variables with finite domains and constraints) and feature models
# (feature tree, relationships, cross-tree constraints).
#
# Constraints are propositional formulas over atoms. An atom is a Boolean
# variable name or 'var=value' for a variable with a finite domain.
#==============================================================================

from enum import Enum

import kb_solver

class KnowledgeBaseNotBuiltError(Exception):
    pass

class Op(Enum):
    VAR = 1
    NOT = 2
    AND = 3
    OR = 4
    IMPLIES = 5
    IFF = 6

# Propositional formula, a tagged node with operands or an atom:
class Formula:
    def __init__(self, op : Op, args=(), atom=None):
        self.op = op
        self.args = tuple(args)
        self.atom = atom
    def atoms(self):
        if self.op == Op.VAR:
            return [self.atom]
        lst = []
        for a in self.args:
            for x in a.atoms():
                if x not in lst:
                    lst.append(x)
        return lst
    def rename(self, mapping : dict):
        if self.op == Op.VAR:
            return Formula(Op.VAR, atom=mapping.get(self.atom, self.atom))
        return Formula(self.op, [a.rename(mapping) for a in self.args])
    def __eq__(self, other):
        return isinstance(other, Formula) and self.op == other.op and \
            self.atom == other.atom and self.args == other.args
    def __hash__(self):
        return hash((self.op, self.atom, self.args))
    def __str__(self):
        if self.op == Op.VAR:
            return str(self.atom)
        if self.op == Op.NOT:
            return '~' + str(self.args[0])
        sep = {Op.AND : ' & ', Op.OR : ' | ', Op.IMPLIES : ' -> ', Op.IFF : ' <-> '}[self.op]
        return '(' + sep.join(str(a) for a in self.args) + ')'
    __repr__ = __str__

# Formula constructors:
def var(atom : str):
    return Formula(Op.VAR, atom=atom)

def neg(f : Formula):
    return Formula(Op.NOT, [f])

def conj(*fs):
    return Formula(Op.AND, fs)

def disj(*fs):
    return Formula(Op.OR, fs)

def implies(a : Formula, b : Formula):
    return Formula(Op.IMPLIES, [a, b])

def iff(a : Formula, b : Formula):
    return Formula(Op.IFF, [a, b])

def eq(name : str, value):
    return var(name + '=' + str(value))

class Variable:
    # domain is None for a Boolean variable
    def __init__(self, name : str, domain=None):
        self.name = name
        self.domain = None if domain is None else [str(v) for v in domain]
    def atoms(self):
        if self.domain is None:
            return [self.name]
        return [self.name + '=' + v for v in self.domain]

class Constraint:
    def __init__(self, name : str, formula : Formula):
        self.name = name
        self.formula = formula
    def __str__(self):
        return self.name + ' : ' + str(self.formula)

# A knowledge base with declared variables and constraints. build() encodes
# it into CNF, the solver-side counts and solve() are available only afterwards.
class KnowledgeBase:
    def __init__(self, name : str, source : str):
        self.name = name
        self.source = source
        self.variables = []
        self.constraints = []
        self.fixed_atoms = []
        self.solver_model = None
    def add_variable(self, name : str, domain=None):
        v = Variable(name, domain)
        self.variables.append(v)
        return v
    def add_constraint(self, name : str, formula : Formula):
        c = Constraint(name, formula)
        self.constraints.append(c)
        return c
    def fix(self, atom : str):
        self.fixed_atoms.append(atom)
    @property
    def num_variables(self):
        return len(self.variables)
    @property
    def num_constraints(self):
        return len(self.constraints)
    def build(self):
        self.solver_model = kb_solver.encode(self)
        return self
    def _built_model(self):
        if self.solver_model is None:
            raise KnowledgeBaseNotBuiltError('knowledge base ' + self.name + ' is not built')
        return self.solver_model
    @property
    def num_solver_variables(self):
        return self._built_model().num_variables
    @property
    def num_solver_constraints(self):
        return self._built_model().num_constraints
    def solve(self):
        return self._built_model().solve()

class RelationshipType(Enum):
    MANDATORY = 1
    OPTIONAL = 2
    ALTERNATIVE = 3
    OR = 4

class Feature:
    def __init__(self, id : str, name : str):
        self.id = id
        self.name = name
        self.parent = None
        self.children = []
    def is_leaf(self):
        return len(self.children) == 0
    def __str__(self):
        return self.name

class Relationship:
    def __init__(self, type : RelationshipType, parent : Feature, children : list):
        assert(len(children) > 0)
        self.type = type
        self.parent = parent
        self.children = list(children)
    def __str__(self):
        return self.type.name + '(' + self.parent.id + ', ' + \
            ', '.join(c.id for c in self.children) + ')'

class CTConstraint:
    def __init__(self, name : str, formula : Formula):
        self.name = name
        self.formula = formula
    def __str__(self):
        return self.name + ' : ' + str(self.formula)

class FeatureModel:
    def __init__(self, name : str, source=''):
        self.name = name
        self.source = source
        self.root = None
        self.features = []
        self.relationships = []
        self.constraints = []
        self._by_id = dict()
    def add_feature(self, id : str, name : str, parent=None):
        if id in self._by_id:
            raise ValueError('duplicate feature ' + id)
        f = Feature(id, name)
        if parent is None:
            if self.root is not None:
                raise ValueError('second root feature ' + id)
            self.root = f
        else:
            f.parent = parent
            parent.children.append(f)
        self.features.append(f)
        self._by_id[id] = f
        return f
    def get_feature(self, id : str):
        return self._by_id[id]
    def has_feature(self, id : str):
        return id in self._by_id
    def add_relationship(self, type : RelationshipType, parent : Feature, children : list):
        r = Relationship(type, parent, children)
        self.relationships.append(r)
        return r
    def add_constraint(self, name : str, formula : Formula):
        c = CTConstraint(name, formula)
        self.constraints.append(c)
        return c

# Relationship semantics as a formula over feature ids:
def relationship_formula(r : Relationship):
    p = var(r.parent.id)
    cs = [var(c.id) for c in r.children]
    if r.type == RelationshipType.MANDATORY:
        return conj(*[iff(p, c) for c in cs])
    elif r.type == RelationshipType.OPTIONAL:
        return conj(*[implies(c, p) for c in cs])
    elif r.type == RelationshipType.OR:
        return conj(implies(p, disj(*cs)), *[implies(c, p) for c in cs])
    elif r.type == RelationshipType.ALTERNATIVE:
        parts = [implies(p, disj(*cs))] + [implies(c, p) for c in cs]
        for i in range(len(cs)):
            for j in range(i + 1, len(cs)):
                parts.append(neg(conj(cs[i], cs[j])))
        return conj(*parts)
    raise ValueError('unknown relationship type ' + str(r.type))

# Knowledge base of a feature model: one Boolean variable per feature, one
# constraint per relationship and per cross-tree constraint, the root fixed
# to true.
def feature_model_kb(fm : FeatureModel):
    kb = KnowledgeBase(fm.name, fm.source)
    for f in fm.features:
        kb.add_variable(f.id)
    for r in fm.relationships:
        kb.add_constraint(str(r), relationship_formula(r))
    for c in fm.constraints:
        kb.add_constraint(c.name, c.formula)
    if fm.root is not None:
        kb.fix(fm.root.id)
    return kb
