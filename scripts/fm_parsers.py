# Created on: 18 Oct 2026
#
# Parsers of feature models in the following formats:
#   SXFM (SPLOT)     : .sxfm, .splx
#   FeatureIDE       : .xml
#   Glencoe          : .json
# The format is detected by the file extension.
#
# Example of an SXFM feature tree:
# :r Smartwatch(Smartwatch)
#   :m Connector(Connector)
#     :g [1,*]
#       : GPS(GPS)
#   :o Camera(Camera)
# and of an SXFM constraint (Camera requires HighResolution):
# C1:~Camera or HighResolution
#==============================================================================

import os
import re
import json
import logging
from enum import Enum

from lxml import etree

from kb_model import FeatureModel, RelationshipType, conj, disj, iff, implies, neg, var

class FeatureModelParserError(Exception):
    pass

class FMFormat(Enum):
    NONE = 0
    SXFM = 1
    FEATUREIDE = 2
    GLENCOE = 3

FORMAT_EXTENSIONS = {'.sxfm' : FMFormat.SXFM, '.splx' : FMFormat.SXFM,
    '.xml' : FMFormat.FEATUREIDE, '.json' : FMFormat.GLENCOE}

def get_fm_format(file_name : str):
    ext = os.path.splitext(file_name)[1].lower()
    return FORMAT_EXTENSIONS.get(ext, FMFormat.NONE)

def is_recognized_fm_format(file_name : str):
    return get_fm_format(file_name) != FMFormat.NONE

def check_feature(fm : FeatureModel, id : str):
    if not fm.has_feature(id):
        raise FeatureModelParserError('unknown feature ' + id + ' in constraint')
    return var(id)

#------------------------------------------------------------------------------
# SXFM

SXFM_LINE = re.compile(r'^:(r|m|o|g|)\s*(.*)$')
SXFM_FEATURE = re.compile(r'^(.*?)\s*\(([^()]+)\)\s*$')
SXFM_CARDINALITY = re.compile(r'\[\s*(\d+)\s*,\s*(\d+|\*)\s*\]')

def sxfm_name_id(s : str):
    m = SXFM_FEATURE.match(s)
    if m is None:
        return s.strip(), s.strip()
    return m.group(1), m.group(2).strip()

def sxfm_group_type(lower : int, upper, children_num : int):
    if lower == 1 and upper == 1:
        return RelationshipType.ALTERNATIVE
    if lower == 1 and (upper == '*' or upper >= children_num):
        return RelationshipType.OR
    raise FeatureModelParserError('unsupported group cardinality [' + str(lower) + ',' + str(upper) + ']')

def parse_sxfm_tree(fm : FeatureModel, text : str):
    # Stack of (indent, feature or group):
    stack = []
    entries = [] # [type or group, parent, children] in document order
    for line in text.splitlines():
        if line.strip() == '':
            continue
        indent = len(line.expandtabs(4)) - len(line.expandtabs(4).lstrip())
        m = SXFM_LINE.match(line.strip())
        if m is None:
            raise FeatureModelParserError('unexpected line in feature tree : ' + line.strip())
        kind = m.group(1)
        while len(stack) > 0 and stack[-1][0] >= indent:
            stack.pop()
        top = stack[-1][1] if len(stack) > 0 else None
        if kind == 'r':
            if top is not None or fm.root is not None:
                raise FeatureModelParserError('root must be the first feature')
            name, id = sxfm_name_id(m.group(2))
            stack.append((indent, fm.add_feature(id, name)))
        elif kind == 'm' or kind == 'o':
            if top is None or isinstance(top, list):
                raise FeatureModelParserError('solitary feature without parent feature : ' + line.strip())
            name, id = sxfm_name_id(m.group(2))
            f = fm.add_feature(id, name, top)
            t = RelationshipType.MANDATORY if kind == 'm' else RelationshipType.OPTIONAL
            entries.append([t, top, [f]])
            stack.append((indent, f))
        elif kind == 'g':
            if top is None or isinstance(top, list):
                raise FeatureModelParserError('group without parent feature : ' + line.strip())
            c = SXFM_CARDINALITY.search(m.group(2))
            if c is None:
                raise FeatureModelParserError('group without cardinality : ' + line.strip())
            upper = '*' if c.group(2) == '*' else int(c.group(2))
            group = [(int(c.group(1)), upper), top, []]
            entries.append(group)
            stack.append((indent, group))
        else:
            if top is None or not isinstance(top, list):
                raise FeatureModelParserError('grouped feature outside of a group : ' + line.strip())
            name, id = sxfm_name_id(m.group(2))
            f = fm.add_feature(id, name, top[1])
            top[2].append(f)
            stack.append((indent, f))
    if fm.root is None:
        raise FeatureModelParserError('feature tree without root')
    for t, parent, children in entries:
        if isinstance(t, tuple):
            if len(children) == 0:
                raise FeatureModelParserError('empty group under ' + parent.id)
            t = sxfm_group_type(t[0], t[1], len(children))
        fm.add_relationship(t, parent, children)

def parse_sxfm_constraints(fm : FeatureModel, text : str):
    for line in text.splitlines():
        line = line.strip()
        if line == '':
            continue
        if ':' not in line:
            raise FeatureModelParserError('constraint without name : ' + line)
        name, clause = line.split(':', 1)
        literals = []
        for word in re.split(r'\s+or\s+', clause.strip()):
            word = word.strip()
            if word.startswith('~'):
                literals.append(neg(check_feature(fm, word[1:].strip())))
            else:
                literals.append(check_feature(fm, word))
        f = literals[0] if len(literals) == 1 else disj(*literals)
        fm.add_constraint(name.strip(), f)

def parse_sxfm(fm : FeatureModel, root):
    if root.tag != 'feature_model':
        raise FeatureModelParserError('not an SXFM document : ' + str(root.tag))
    tree = root.find('feature_tree')
    if tree is None or tree.text is None:
        raise FeatureModelParserError('SXFM document without feature tree')
    parse_sxfm_tree(fm, tree.text)
    constraints = root.find('constraints')
    if constraints is not None and constraints.text is not None:
        parse_sxfm_constraints(fm, constraints.text)

#------------------------------------------------------------------------------
# FeatureIDE

FIDE_FEATURES = ['and', 'or', 'alt', 'feature']
# FeatureIDE annotations of a feature
FIDE_META = ['description', 'graphics', 'property']

def elements(e):
    # skip comments and processing instructions
    return [c for c in e if isinstance(c.tag, str)]

def parse_featureide_feature(fm : FeatureModel, e, parent):
    if e.tag not in FIDE_FEATURES:
        raise FeatureModelParserError('unexpected element ' + e.tag + ' in struct')
    name = e.get('name')
    if name is None:
        raise FeatureModelParserError('feature without name')
    f = fm.add_feature(name, name, parent)
    children = [c for c in elements(e) if c.tag not in FIDE_META]
    if e.tag == 'feature':
        if len(children) > 0:
            raise FeatureModelParserError('leaf feature ' + name + ' has children')
        return f
    if len(children) == 0:
        raise FeatureModelParserError('feature ' + name + ' of type ' + e.tag + ' without children')
    sub = [parse_featureide_feature(fm, c, f) for c in children]
    if e.tag == 'and':
        for c, s in zip(children, sub):
            t = RelationshipType.MANDATORY if c.get('mandatory') == 'true' else RelationshipType.OPTIONAL
            fm.add_relationship(t, f, [s])
    elif e.tag == 'or':
        fm.add_relationship(RelationshipType.OR, f, sub)
    else:
        fm.add_relationship(RelationshipType.ALTERNATIVE, f, sub)
    return f

def parse_featureide_formula(fm : FeatureModel, e):
    args = [c for c in elements(e) if c.tag != 'description']
    if e.tag == 'var':
        return check_feature(fm, (e.text or '').strip())
    if e.tag == 'not' and len(args) == 1:
        return neg(parse_featureide_formula(fm, args[0]))
    if e.tag in ['conj', 'disj'] and len(args) >= 1:
        fs = [parse_featureide_formula(fm, a) for a in args]
        if len(fs) == 1:
            return fs[0]
        return conj(*fs) if e.tag == 'conj' else disj(*fs)
    if e.tag in ['imp', 'eq'] and len(args) == 2:
        a = parse_featureide_formula(fm, args[0])
        b = parse_featureide_formula(fm, args[1])
        return implies(a, b) if e.tag == 'imp' else iff(a, b)
    raise FeatureModelParserError('unsupported constraint element ' + e.tag)

def parse_featureide(fm : FeatureModel, root):
    if root.tag != 'featureModel':
        raise FeatureModelParserError('not a FeatureIDE document : ' + str(root.tag))
    struct = root.find('struct')
    if struct is None or len(elements(struct)) != 1:
        raise FeatureModelParserError('FeatureIDE struct must have exactly one root feature')
    parse_featureide_feature(fm, elements(struct)[0], None)
    constraints = root.find('constraints')
    if constraints is None:
        return
    k = 0
    for rule in elements(constraints):
        args = [c for c in elements(rule) if c.tag not in ['description', 'tags']]
        if rule.tag != 'rule' or len(args) != 1:
            raise FeatureModelParserError('malformed constraint rule')
        k += 1
        fm.add_constraint('C' + str(k), parse_featureide_formula(fm, args[0]))

#------------------------------------------------------------------------------
# Glencoe

GLENCOE_GROUPS = {'XOR' : RelationshipType.ALTERNATIVE, 'OR' : RelationshipType.OR}

def parse_glencoe_node(fm : FeatureModel, features : dict, node : dict, parent):
    if not isinstance(node, dict):
        raise FeatureModelParserError('tree node is not an object : ' + str(node))
    id = node.get('id')
    if not isinstance(id, str) or id not in features:
        raise FeatureModelParserError('tree node ' + str(id) + ' is not declared in features')
    entry = features[id]
    if not isinstance(entry, dict):
        raise FeatureModelParserError('feature ' + id + ' is not an object')
    f = fm.add_feature(id, entry.get('name', id), parent)
    children = node.get('children', [])
    if not isinstance(children, list):
        raise FeatureModelParserError('children of ' + id + ' are not a list')
    sub = [parse_glencoe_node(fm, features, c, f) for c in children]
    if len(sub) == 0:
        return f
    group = entry.get('group', 'AND')
    if group in GLENCOE_GROUPS:
        fm.add_relationship(GLENCOE_GROUPS[group], f, sub)
    elif group == 'AND':
        for s in sub:
            optional = features[s.id].get('optional', False)
            t = RelationshipType.OPTIONAL if optional else RelationshipType.MANDATORY
            fm.add_relationship(t, f, [s])
    else:
        raise FeatureModelParserError('unsupported group type ' + str(group))
    return f

def parse_glencoe_term(fm : FeatureModel, term : dict):
    if not isinstance(term, dict):
        raise FeatureModelParserError('term is not an object : ' + str(term))
    t = term.get('type')
    ops = term.get('operands', [])
    if not isinstance(ops, list):
        raise FeatureModelParserError('operands of ' + str(t) + ' are not a list')
    if t == 'FeatureTerm':
        if len(ops) != 1 or not isinstance(ops[0], str):
            raise FeatureModelParserError('feature term without feature id')
        return check_feature(fm, ops[0])
    args = [parse_glencoe_term(fm, o) for o in ops]
    if t == 'NotTerm' and len(args) == 1:
        return neg(args[0])
    if t == 'AndTerm' and len(args) >= 2:
        return conj(*args)
    if t == 'OrTerm' and len(args) >= 2:
        return disj(*args)
    if t == 'ImpliesTerm' and len(args) == 2:
        return implies(args[0], args[1])
    if t == 'ExcludesTerm' and len(args) == 2:
        return implies(args[0], neg(args[1]))
    if t in ['EquivalentTerm', 'EquivalenceTerm'] and len(args) == 2:
        return iff(args[0], args[1])
    raise FeatureModelParserError('unsupported term ' + str(t))

def parse_glencoe(fm : FeatureModel, doc):
    if not isinstance(doc, dict) or not isinstance(doc.get('features'), dict) or 'tree' not in doc:
        raise FeatureModelParserError('not a Glencoe document')
    constraints = doc.get('constraints', {})
    if not isinstance(constraints, dict):
        raise FeatureModelParserError('Glencoe constraints are not an object')
    parse_glencoe_node(fm, doc['features'], doc['tree'], None)
    for name, term in constraints.items():
        fm.add_constraint(name, parse_glencoe_term(fm, term))

#------------------------------------------------------------------------------

def parse_feature_model(file_name : str):
    fmt = get_fm_format(file_name)
    if fmt == FMFormat.NONE:
        raise FeatureModelParserError('unknown feature model format : ' + file_name)
    fm = FeatureModel(os.path.basename(file_name), fmt.name)
    logging.info('Parsing ' + file_name + ' as ' + fmt.name)
    try:
        if fmt == FMFormat.GLENCOE:
            with open(file_name, 'r') as f:
                parse_glencoe(fm, json.load(f))
        else:
            root = etree.parse(file_name).getroot()
            if fmt == FMFormat.SXFM:
                parse_sxfm(fm, root)
            else:
                parse_featureide(fm, root)
    except (OSError, ValueError, KeyError, TypeError, AttributeError, etree.XMLSyntaxError) as e:
        raise FeatureModelParserError(file_name + ' : ' + str(e)) from e
    logging.info('%d features, %d relationships, %d constraints' % \
        (len(fm.features), len(fm.relationships), len(fm.constraints)))
    return fm
