from kb_model import KnowledgeBase, conj, disj, eq, iff, implies, neg, var
from kb_solver import CNF, encode

def test_boolean_variables_one_cnf_variable_each():
    kb = KnowledgeBase('kb', 'test')
    kb.add_variable('A')
    kb.add_variable('B')
    kb.add_constraint('c1', implies(var('A'), var('B')))
    m = encode(kb)
    assert m.num_variables == 2
    assert m.cnf.clauses == [[-1, 2]]
    assert m.solve()

def test_domain_is_one_hot():
    kb = KnowledgeBase('kb', 'test')
    kb.add_variable('X', [1, 2, 3])
    m = encode(kb)
    assert m.num_variables == 3
    # at least one value and three pairwise exclusions
    assert m.cnf.clauses == [[1, 2, 3], [-1, -2], [-1, -3], [-2, -3]]

def test_nested_formula_gets_auxiliary_variable():
    kb = KnowledgeBase('kb', 'test')
    for n in ['A', 'B', 'C']:
        kb.add_variable(n)
    kb.add_constraint('c1', disj(var('A'), conj(var('B'), var('C'))))
    m = encode(kb)
    assert m.num_variables == 4
    assert m.num_constraints == 4
    assert m.solve()

def test_fixed_atoms_and_unsatisfiability():
    kb = KnowledgeBase('kb', 'test')
    kb.add_variable('A')
    kb.add_variable('B')
    kb.add_constraint('c1', iff(var('A'), var('B')))
    kb.add_constraint('c2', neg(conj(var('A'), var('B'))))
    kb.fix('A')
    m = encode(kb)
    assert m.num_constraints == 4
    assert not m.solve()

def test_unsatisfiable_domain_constraint():
    kb = KnowledgeBase('kb', 'test')
    kb.add_variable('X', ['a', 'b'])
    kb.add_constraint('c1', neg(eq('X', 'a')))
    kb.add_constraint('c2', neg(eq('X', 'b')))
    assert not encode(kb).solve()

def test_tseitin_cache_reuses_subformula():
    cnf = CNF()
    for n in ['A', 'B', 'C']:
        cnf.add_atom(n)
    sub = conj(var('B'), var('C'))
    x = cnf.lit(sub)
    assert cnf.lit(conj(var('B'), var('C'))) == x
    assert cnf.var_num == 4

def test_write_dimacs(tmp_path):
    kb = KnowledgeBase('kb', 'test')
    kb.add_variable('A')
    kb.add_variable('B')
    kb.add_constraint('c1', disj(neg(var('A')), var('B')))
    kb.fix('A')
    name = str(tmp_path / 'kb.cnf')
    encode(kb).write_dimacs(name, 'kb')
    with open(name) as f:
        lines = f.read().splitlines()
    assert lines == ['c kb', 'p cnf 2 2', '-1 2 0', '1 0']
