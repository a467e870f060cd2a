# Created on: 18 Oct 2026
#
# Encodes a knowledge base into CNF and checks its satisfiability by z3.
#
# Boolean variables get one CNF variable, variables with finite domains are
# one-hot encoded (at-least-one clause plus pairwise at-most-one clauses).
# Each constraint is split on top-level conjunctions into clauses; nested
# subformulas get Tseitin auxiliary variables.
#==============================================================================

import z3

import kb_model

class CNF:
    def __init__(self):
        self.var_num = 0
        self.clauses = []
        self.atom_ids = dict()
        self._aux = dict()
    def new_var(self):
        self.var_num += 1
        return self.var_num
    def add_atom(self, atom : str):
        if atom in self.atom_ids:
            raise ValueError('duplicate atom ' + atom)
        self.atom_ids[atom] = self.new_var()
        return self.atom_ids[atom]
    def add_clause(self, lits : list):
        self.clauses.append(list(lits))
    def atom_lit(self, atom : str):
        if atom not in self.atom_ids:
            raise ValueError('unknown atom ' + str(atom))
        return self.atom_ids[atom]

    # Literal standing for a subformula:
    def lit(self, f):
        if f.op == kb_model.Op.VAR:
            return self.atom_lit(f.atom)
        if f.op == kb_model.Op.NOT:
            return -self.lit(f.args[0])
        if f in self._aux:
            return self._aux[f]
        x = self.new_var()
        if f.op == kb_model.Op.AND:
            lits = [self.lit(a) for a in f.args]
            for l in lits:
                self.add_clause([-x, l])
            self.add_clause([x] + [-l for l in lits])
        elif f.op == kb_model.Op.OR:
            lits = [self.lit(a) for a in f.args]
            self.add_clause([-x] + lits)
            for l in lits:
                self.add_clause([x, -l])
        elif f.op == kb_model.Op.IMPLIES:
            a = self.lit(f.args[0])
            b = self.lit(f.args[1])
            self.add_clause([-x, -a, b])
            self.add_clause([x, a])
            self.add_clause([x, -b])
        elif f.op == kb_model.Op.IFF:
            a = self.lit(f.args[0])
            b = self.lit(f.args[1])
            self.add_clause([-x, -a, b])
            self.add_clause([-x, a, -b])
            self.add_clause([x, a, b])
            self.add_clause([x, -a, -b])
        else:
            raise ValueError('unknown operator ' + str(f.op))
        self._aux[f] = x
        return x

    # Formulas whose disjunction is equivalent to f:
    def disjuncts(self, f):
        if f.op == kb_model.Op.OR:
            res = []
            for a in f.args:
                res += self.disjuncts(a)
            return res
        if f.op == kb_model.Op.IMPLIES:
            return [kb_model.neg(f.args[0])] + self.disjuncts(f.args[1])
        if f.op == kb_model.Op.NOT and f.args[0].op == kb_model.Op.AND:
            return [kb_model.neg(a) for a in f.args[0].args]
        return [f]

    # Assert f as true:
    def add_formula(self, f):
        if f.op == kb_model.Op.AND:
            for a in f.args:
                self.add_formula(a)
        elif f.op == kb_model.Op.IFF:
            a = self.lit(f.args[0])
            b = self.lit(f.args[1])
            self.add_clause([-a, b])
            self.add_clause([a, -b])
        elif f.op == kb_model.Op.NOT and f.args[0].op == kb_model.Op.NOT:
            self.add_formula(f.args[0].args[0])
        elif f.op == kb_model.Op.NOT and f.args[0].op == kb_model.Op.OR:
            for a in f.args[0].args:
                self.add_formula(kb_model.neg(a))
        elif f.op == kb_model.Op.NOT and f.args[0].op == kb_model.Op.IMPLIES:
            self.add_formula(f.args[0].args[0])
            self.add_formula(kb_model.neg(f.args[0].args[1]))
        else:
            self.add_clause([self.lit(d) for d in self.disjuncts(f)])

class SolverModel:
    def __init__(self, cnf : CNF):
        self.cnf = cnf
    @property
    def num_variables(self):
        return self.cnf.var_num
    @property
    def num_constraints(self):
        return len(self.cnf.clauses)
    # True if the CNF is satisfiable, no model is kept:
    def solve(self):
        s = z3.Solver()
        xs = [None] + [z3.Bool('x' + str(i)) for i in range(1, self.cnf.var_num + 1)]
        for clause in self.cnf.clauses:
            lits = [xs[l] if l > 0 else z3.Not(xs[-l]) for l in clause]
            if len(lits) == 0:
                s.add(z3.BoolVal(False))
            elif len(lits) == 1:
                s.add(lits[0])
            else:
                s.add(z3.Or(lits))
        res = s.check()
        if res == z3.unknown:
            raise RuntimeError('z3 returned unknown : ' + s.reason_unknown())
        return res == z3.sat
    def write_dimacs(self, file_name : str, comment=''):
        with open(file_name, 'w') as ofile:
            if comment != '':
                ofile.write('c ' + comment + '\n')
            ofile.write('p cnf ' + str(self.num_variables) + ' ' + str(self.num_constraints) + '\n')
            for clause in self.cnf.clauses:
                s = ''
                for l in clause:
                    s += str(l) + ' '
                ofile.write(s + '0\n')

def encode(kb):
    cnf = CNF()
    for v in kb.variables:
        ids = [cnf.add_atom(a) for a in v.atoms()]
        if v.domain is None:
            continue
        # Exactly one value:
        cnf.add_clause(ids)
        for i in range(len(ids)):
            for j in range(i + 1, len(ids)):
                cnf.add_clause([-ids[i], -ids[j]])
    for c in kb.constraints:
        cnf.add_formula(c.formula)
    for atom in kb.fixed_atoms:
        cnf.add_clause([cnf.atom_lit(atom)])
    return SolverModel(cnf)
