import os
import shutil

import pytest

from kb_model import FeatureModel, RelationshipType, conj, disj, implies, neg, var

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
MODELS_DIR = os.path.join(TESTS_DIR, 'models')
SMARTWATCH = os.path.join(os.path.dirname(TESTS_DIR), 'models', 'smartwatch.sxfm')

def make_smartwatch(prefix=''):
    fm = FeatureModel('smartwatch')
    def add(id, parent=None):
        return fm.add_feature(prefix + id, id, parent)
    root = add('Smartwatch')
    connector = add('Connector', root)
    screen = add('Screen', root)
    camera = add('Camera', root)
    compass = add('Compass', root)
    connectors = [add(n, connector) for n in ['GPS', 'Cellular', 'Wifi', 'Bluetooth']]
    screens = [add(n, screen) for n in ['Analog', 'HighResolution', 'Eink']]
    fm.add_relationship(RelationshipType.MANDATORY, root, [connector])
    fm.add_relationship(RelationshipType.MANDATORY, root, [screen])
    fm.add_relationship(RelationshipType.OPTIONAL, root, [camera])
    fm.add_relationship(RelationshipType.OPTIONAL, root, [compass])
    fm.add_relationship(RelationshipType.OR, connector, connectors)
    fm.add_relationship(RelationshipType.ALTERNATIVE, screen, screens)
    v = lambda id: var(prefix + id)
    fm.add_constraint('C1', implies(v('Camera'), v('HighResolution')))
    fm.add_constraint('C2', disj(neg(v('Compass')), v('GPS')))
    fm.add_constraint('C3', neg(conj(v('Analog'), v('Cellular'))))
    fm.add_constraint('C4', disj(v('GPS'), v('Wifi'), v('Bluetooth')))
    return fm

@pytest.fixture
def smartwatch_fm():
    return make_smartwatch()

@pytest.fixture
def fm_dir(tmp_path):
    d = tmp_path / 'models'
    d.mkdir()
    shutil.copy(SMARTWATCH, str(d / 'smartwatch.sxfm'))
    (d / 'notes.txt').write_text('not a feature model\n')
    return d
