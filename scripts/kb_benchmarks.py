# Created on: 18 Oct 2026
#
# Constructors of the benchmark knowledge bases PC, Renault, and Camera.
# PC and Renault are condensed versions of the configuration benchmarks from
# https://www.itu.dk/research/cla/externals/clib/ : the main components and
# their compatibility rules are kept, large option tables are left out.
#==============================================================================

from kb_model import KnowledgeBase, conj, disj, eq, implies, iff, neg

CLIB_SOURCE = 'https://www.itu.dk/research/cla/externals/clib/'

class UnsupportedKnowledgeBaseError(Exception):
    pass

# name in {values}:
def one_of(name : str, values : list):
    return disj(*[eq(name, v) for v in values])

# Allowed combinations of values:
def table(names : list, rows : list):
    return disj(*[conj(*[eq(n, v) for n, v in zip(names, row)]) for row in rows])

def build_pc():
    kb = KnowledgeBase('PC', CLIB_SOURCE)
    kb.add_variable('Type', ['office', 'gaming', 'workstation'])
    kb.add_variable('CPU', ['i3', 'i5', 'i7', 'i9', 'xeon'])
    kb.add_variable('Motherboard', ['basic', 'gaming', 'server'])
    kb.add_variable('RAM', [4, 8, 16, 32, 64])
    kb.add_variable('GPU', ['integrated', 'gtx', 'rtx', 'quadro'])
    kb.add_variable('PSU', [300, 500, 750, 1000])
    kb.add_variable('Storage', ['hdd', 'ssd', 'nvme'])
    kb.add_variable('Case', ['mini', 'midi', 'tower'])
    kb.add_variable('Cooler', ['stock', 'air', 'liquid'])
    kb.add_variable('OS', ['none', 'linux', 'windows'])
    kb.add_variable('Monitor', ['none', 'hd', '4k'])

    kb.add_constraint('cpu_motherboard', table(['CPU', 'Motherboard'],
        [['i3', 'basic'], ['i5', 'basic'], ['i5', 'gaming'], ['i7', 'gaming'],
         ['i9', 'gaming'], ['xeon', 'server']]))
    kb.add_constraint('i9_cooler', implies(eq('CPU', 'i9'), one_of('Cooler', ['air', 'liquid'])))
    kb.add_constraint('rtx_psu', implies(eq('GPU', 'rtx'), one_of('PSU', [750, 1000])))
    kb.add_constraint('quadro_workstation', implies(eq('GPU', 'quadro'), eq('Type', 'workstation')))
    kb.add_constraint('gaming_gpu', implies(eq('Type', 'gaming'), one_of('GPU', ['gtx', 'rtx'])))
    kb.add_constraint('office_parts', implies(eq('Type', 'office'),
        conj(neg(eq('CPU', 'i9')), neg(eq('GPU', 'quadro')))))
    kb.add_constraint('mini_case', implies(eq('Case', 'mini'),
        conj(neg(eq('GPU', 'quadro')), neg(eq('Cooler', 'liquid')))))
    kb.add_constraint('basic_ram', implies(eq('Motherboard', 'basic'), one_of('RAM', [4, 8, 16])))
    kb.add_constraint('workstation_ram', implies(eq('Type', 'workstation'), one_of('RAM', [32, 64])))
    kb.add_constraint('nvme_motherboard', implies(eq('Storage', 'nvme'), neg(eq('Motherboard', 'basic'))))
    kb.add_constraint('4k_gpu', implies(eq('Monitor', '4k'), neg(eq('GPU', 'integrated'))))
    kb.add_constraint('gaming_os', implies(eq('Type', 'gaming'), eq('OS', 'windows')))
    kb.add_constraint('psu_300', implies(eq('PSU', 300), eq('GPU', 'integrated')))
    kb.add_constraint('server_case', iff(eq('Motherboard', 'server'), eq('Case', 'tower')))
    return kb

def build_renault():
    kb = KnowledgeBase('Renault', CLIB_SOURCE)
    kb.add_variable('Model', ['clio', 'megane', 'scenic', 'laguna'])
    kb.add_variable('Engine', ['1.2', '1.5dci', '1.6', '2.0', '2.0dci'])
    kb.add_variable('Fuel', ['petrol', 'diesel'])
    kb.add_variable('Gearbox', ['manual5', 'manual6', 'auto'])
    kb.add_variable('Trim', ['authentique', 'expression', 'dynamique', 'privilege'])
    kb.add_variable('Body', ['3door', '5door', 'estate'])
    kb.add_variable('Wheels', [15, 16, 17, 18])
    kb.add_variable('AirCon', ['none', 'manual', 'climate'])
    kb.add_variable('Radio', ['basic', 'cd', 'nav'])
    kb.add_variable('Sunroof', ['yes', 'no'])
    kb.add_variable('Seats', ['cloth', 'leather'])
    kb.add_variable('Cruise', ['yes', 'no'])
    kb.add_variable('Color', ['white', 'black', 'red', 'blue', 'grey'])

    kb.add_constraint('engine_fuel', table(['Engine', 'Fuel'],
        [['1.2', 'petrol'], ['1.5dci', 'diesel'], ['1.6', 'petrol'],
         ['2.0', 'petrol'], ['2.0dci', 'diesel']]))
    kb.add_constraint('clio_body', implies(eq('Model', 'clio'), one_of('Body', ['3door', '5door'])))
    kb.add_constraint('clio_engine', implies(eq('Model', 'clio'),
        conj(neg(eq('Engine', '2.0')), neg(eq('Engine', '2.0dci')))))
    kb.add_constraint('laguna_engine', implies(eq('Model', 'laguna'), neg(eq('Engine', '1.2'))))
    kb.add_constraint('laguna_body', implies(eq('Model', 'laguna'), one_of('Body', ['5door', 'estate'])))
    kb.add_constraint('scenic_body', implies(eq('Model', 'scenic'), eq('Body', '5door')))
    kb.add_constraint('auto_engine', implies(eq('Gearbox', 'auto'), one_of('Engine', ['1.6', '2.0', '2.0dci'])))
    kb.add_constraint('dci_gearbox', implies(eq('Engine', '2.0dci'), one_of('Gearbox', ['manual6', 'auto'])))
    kb.add_constraint('authentique_options', implies(eq('Trim', 'authentique'),
        conj(one_of('AirCon', ['none', 'manual']), eq('Wheels', 15), eq('Seats', 'cloth'))))
    kb.add_constraint('privilege_options', implies(eq('Trim', 'privilege'),
        conj(eq('AirCon', 'climate'), eq('Seats', 'leather'))))
    kb.add_constraint('leather_trim', implies(eq('Seats', 'leather'), one_of('Trim', ['dynamique', 'privilege'])))
    kb.add_constraint('nav_trim', implies(eq('Radio', 'nav'), one_of('Trim', ['dynamique', 'privilege'])))
    kb.add_constraint('wheels_18', implies(eq('Wheels', 18),
        conj(one_of('Model', ['megane', 'laguna']), one_of('Trim', ['dynamique', 'privilege']))))
    kb.add_constraint('sunroof_body', implies(eq('Sunroof', 'yes'), neg(eq('Body', '3door'))))
    kb.add_constraint('cruise_trim', implies(eq('Cruise', 'yes'), neg(eq('Trim', 'authentique'))))
    return kb

def build_camera():
    kb = KnowledgeBase('Camera', 'Camera configuration example')
    kb.add_variable('Resolution', [12, 20, 24, 30, 45])
    kb.add_variable('Sensor', ['APS-C', 'full-frame'])
    kb.add_variable('Display', ['none', 'fixed', 'tiltable', 'articulated'])
    kb.add_variable('Touch', ['yes', 'no'])
    kb.add_variable('Wifi', ['yes', 'no'])
    kb.add_variable('NFC', ['yes', 'no'])
    kb.add_variable('GPS', ['yes', 'no'])
    kb.add_variable('MaxISO', [12800, 25600, 51200, 102400])
    kb.add_variable('FPS', [3, 5, 7, 10, 12])
    kb.add_variable('Weight', [300, 500, 700, 900])
    kb.add_variable('Price', ['low', 'mid', 'high'])

    kb.add_constraint('resolution_45', implies(eq('Resolution', 45), eq('Sensor', 'full-frame')))
    kb.add_constraint('full_frame_price', implies(eq('Sensor', 'full-frame'), neg(eq('Price', 'low'))))
    kb.add_constraint('touch_display', implies(eq('Touch', 'yes'), neg(eq('Display', 'none'))))
    kb.add_constraint('nfc_wifi', implies(eq('NFC', 'yes'), eq('Wifi', 'yes')))
    kb.add_constraint('gps_wifi', implies(eq('GPS', 'yes'), eq('Wifi', 'yes')))
    kb.add_constraint('fps_12', implies(eq('FPS', 12), eq('Price', 'high')))
    kb.add_constraint('aps_c_iso', implies(eq('Sensor', 'APS-C'), neg(eq('MaxISO', 102400))))
    kb.add_constraint('articulated_weight', implies(eq('Display', 'articulated'), neg(eq('Weight', 300))))
    kb.add_constraint('resolution_12', implies(eq('Resolution', 12), neg(eq('Price', 'high'))))
    kb.add_constraint('full_frame_weight', implies(eq('Sensor', 'full-frame'), neg(eq('Weight', 300))))
    return kb

BENCHMARKS = {'PC' : build_pc, 'Renault' : build_renault, 'Camera' : build_camera}

def check_knowledge_base_names(names : list):
    for name in names:
        if name not in BENCHMARKS:
            raise UnsupportedKnowledgeBaseError('The knowledge base ' + name + ' is not supported.')

def build_knowledge_base(name : str):
    check_knowledge_base_names([name])
    return BENCHMARKS[name]()
