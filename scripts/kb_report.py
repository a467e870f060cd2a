# Created on: 18 Oct 2026
#
# Writes statistics records to a report, one block per knowledge base:
# 1
# Name: PC
# Source: https://www.itu.dk/research/cla/externals/clib/
# #variables: 11
# ...
# Consistency: true
# Feature models get a second part after an empty line (CTC ratio, #features,
# ...). Optionally all records are saved as a whitespace-delimited table.
#==============================================================================

import numpy as np
import pandas as pd

from kb_metrics import StatisticsRecord

UNDEFINED = 'undefined'

COUNT_COLUMNS = ['variables', 'constraints', 'choco-variables', 'choco-constraints',
    'features', 'leaf-features', 'relationships', 'ctc', 'mandatory', 'optional',
    'alternative', 'or', 'requires', 'excludes']

def format_ratio(ratio):
    return UNDEFINED if ratio is None else str(ratio)

class ReportWriter:
    def __init__(self, stream):
        self.stream = stream
    def write_line(self, s : str):
        self.stream.write(s + '\n')
    def append(self, rec : StatisticsRecord):
        self.write_line(str(rec.index))
        self.write_line('Name: ' + rec.name)
        self.write_line('Source: ' + rec.source)
        self.write_line('#variables: ' + str(rec.num_variables))
        self.write_line('#constraints: ' + str(rec.num_constraints))
        self.write_line('#Choco variables: ' + str(rec.num_solver_variables))
        self.write_line('#Choco constraints: ' + str(rec.num_solver_constraints))
        self.write_line('Consistency: ' + ('true' if rec.consistent else 'false'))
        if rec.is_fm:
            self.write_line('')
            self.write_line('CTC ratio: ' + format_ratio(rec.ctc_ratio))
            self.write_line('#features: ' + str(rec.num_features))
            self.write_line('#leaf features: ' + str(rec.num_leaf))
            self.write_line('#relationships: ' + str(rec.num_relationships))
            self.write_line('#constraints: ' + str(rec.num_ctc))
            self.write_line('#MANDATORY: ' + str(rec.num_mandatory))
            self.write_line('#OPTIONAL: ' + str(rec.num_optional))
            self.write_line('#ALTERNATIVE: ' + str(rec.num_alternative))
            self.write_line('#OR: ' + str(rec.num_or))
            self.write_line('#REQUIRES: ' + str(rec.num_requires))
            self.write_line('#EXCLUDES: ' + str(rec.num_excludes))
        self.stream.flush()

def records_frame(records : list):
    rows = []
    for rec in records:
        rows.append({'index' : rec.index, 'name' : rec.name, 'source' : rec.source,
            'variables' : rec.num_variables, 'constraints' : rec.num_constraints,
            'choco-variables' : rec.num_solver_variables,
            'choco-constraints' : rec.num_solver_constraints,
            'consistency' : 'true' if rec.consistent else 'false',
            'ctc-ratio' : np.nan if rec.ctc_ratio is None else rec.ctc_ratio,
            'features' : rec.num_features, 'leaf-features' : rec.num_leaf,
            'relationships' : rec.num_relationships, 'ctc' : rec.num_ctc,
            'mandatory' : rec.num_mandatory, 'optional' : rec.num_optional,
            'alternative' : rec.num_alternative, 'or' : rec.num_or,
            'requires' : rec.num_requires, 'excludes' : rec.num_excludes})
    df = pd.DataFrame(rows, columns=['index', 'name', 'source'] + COUNT_COLUMNS[:4] + \
        ['consistency', 'ctc-ratio'] + COUNT_COLUMNS[4:])
    df['ctc-ratio'] = df['ctc-ratio'].astype(float)
    return df.astype({col : 'Int64' for col in ['index'] + COUNT_COLUMNS})

def write_summary(records : list, file_name : str):
    df = records_frame(records)
    df.to_csv(file_name, sep=' ', index=False, na_rep='NaN')
    return df
