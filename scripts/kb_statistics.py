# Created on: 18 Oct 2026
#
# Calculates statistics of knowledge bases:
#   - benchmark knowledge bases PC, Renault, and Camera;
#   - feature models from SPLOT (SXFM), FeatureIDE, and Glencoe.
# For every knowledge base the name, the source, the numbers of variables and
# constraints, the numbers of CNF variables and clauses, and the consistency
# are reported. For feature models also the CTC ratio, the numbers of
# features, leaf features, relationships, cross-tree constraints, and the
# numbers of MANDATORY, OPTIONAL, ALTERNATIVE, OR relationships and REQUIRES,
# EXCLUDES constraints.
#
# Example:
#   python3 ./kb_statistics.py -kb=PC,Renault -fmdir=./models -out=stat.txt
#==============================================================================

import os
import sys
import logging
from enum import Enum

import fm_parsers
import kb_benchmarks
import kb_metrics
import kb_model
import kb_report

script_name = 'kb_statistics.py'
version = '1.3.1'

class Banner:
    title = 'Knowledge Base Statistics'
    subtitle = 'Supports the following knowledge bases:\n' +\
        '(1) Feature Models from SPLOT, FeatureIDE, Glencoe;\n' +\
        '(2) PC and Renault from ' + kb_benchmarks.CLIB_SOURCE + ', and Camera'
    usage = 'Usage : ' + script_name + ' [options]'

# Input options:
class Options:
    def __init__(self):
        self.kbs = []              # names of benchmark knowledge bases
        self.fm = ''               # feature model file
        self.fm_dir = ''           # folder with feature model files
        self.out_file = ''         # report file
        self.summary_file = ''     # table with all records
        self.cnf_dir = ''          # folder for DIMACS encodings
        self.log_file = ''
        self.stop_error = False
        self.help = False
        self.version = False
        self.unknown = []
    def __str__(self):
        return 'kbs : ' + ','.join(self.kbs) + '\n' +\
        'fm : ' + self.fm + '\n' +\
        'fm_dir : ' + self.fm_dir + '\n' +\
        'out_file : ' + self.out_file + '\n' +\
        'summary_file : ' + self.summary_file + '\n' +\
        'cnf_dir : ' + self.cnf_dir + '\n' +\
        'log_file : ' + self.log_file + '\n' +\
        'stop_error : ' + str(self.stop_error) + '\n'
    def read(self, argv):
        for p in argv:
            # Parse comma-separated knowledge bases:
            if p.startswith('-kb='):
                for name in p.split('-kb=')[1].split(','):
                    if name == '':
                        continue
                    self.kbs.append(name)
            elif p.startswith('-fm='):
                self.fm = p.split('-fm=')[1]
            elif p.startswith('-fmdir='):
                self.fm_dir = p.split('-fmdir=')[1]
            elif p.startswith('-out='):
                self.out_file = p.split('-out=')[1]
            elif p.startswith('-summary='):
                self.summary_file = p.split('-summary=')[1]
            elif p.startswith('-cnfdir='):
                self.cnf_dir = p.split('-cnfdir=')[1]
            elif p.startswith('-log='):
                self.log_file = p.split('-log=')[1]
            elif p == '--stop_error':
                self.stop_error = True
            elif p == '-h' or p == '--help':
                self.help = True
            elif p == '-v':
                self.version = True
            else:
                self.unknown.append(p)
        return self

def print_usage(banner):
    print(banner.title)
    print(banner.subtitle + '\n')
    print(banner.usage)
    print('options :\n' +\
    '-kb=<str>       - (default : \'\')  comma-separated knowledge bases : PC, Renault, Camera' + '\n' +\
    '-fm=<str>       - (default : \'\')  feature model file' + '\n' +\
    '-fmdir=<str>    - (default : \'\')  folder with feature model files' + '\n' +\
    '-out=<str>      - (required)      file for the statistics' + '\n' +\
    '-summary=<str>  - (default : \'\')  file for a table with all statistics' + '\n' +\
    '-cnfdir=<str>   - (default : \'\')  folder for CNFs of the knowledge bases' + '\n' +\
    '-log=<str>      - (default : \'\')  log file; warnings go to stderr if not given' + '\n' +\
    '--stop_error    - (default : False) stop if a knowledge base fails' + '\n' +\
    '-v              - print version' + '\n' +\
    '-h, --help      - print this message')

class ItemKind(Enum):
    KB = 1
    FM = 2

class RunState(Enum):
    IDLE = 1
    RESOLVING_INPUTS = 2
    PROCESSING_ITEM = 3
    DONE = 4
    ABORTED = 5

class ConfigurationError(Exception):
    pass

# Failures which are isolated to one knowledge base:
ITEM_ERRORS = (fm_parsers.FeatureModelParserError, ValueError, RuntimeError)

class InputItem:
    def __init__(self, kind : ItemKind, key : str):
        self.kind = kind
        self.key = key
    def label(self):
        return self.key if self.kind == ItemKind.KB else os.path.basename(self.key)

class ItemResult:
    def __init__(self, item : InputItem, record=None, error=None):
        self.item = item
        self.record = record
        self.error = error

def list_fm_dir(fm_dir : str):
    files = []
    for name in sorted(os.listdir(fm_dir)):
        path = os.path.join(fm_dir, name)
        if os.path.isfile(path) and fm_parsers.is_recognized_fm_format(name):
            files.append(path)
    return files

class BatchRun:
    def __init__(self, op : Options, writer : kb_report.ReportWriter):
        self.op = op
        self.writer = writer
        self.state = RunState.IDLE
        self.counter = 0
        self.results = []

    def resolve_inputs(self):
        self.state = RunState.RESOLVING_INPUTS
        kb_benchmarks.check_knowledge_base_names(self.op.kbs)
        items = [InputItem(ItemKind.KB, name) for name in self.op.kbs]
        if self.op.fm != '':
            items.append(InputItem(ItemKind.FM, self.op.fm))
        if self.op.fm_dir != '':
            if not os.path.isdir(self.op.fm_dir):
                raise ConfigurationError('folder ' + self.op.fm_dir + ' is not an existing folder')
            items += [InputItem(ItemKind.FM, path) for path in list_fm_dir(self.op.fm_dir)]
        logging.info('%d knowledge bases to process' % len(items))
        return items

    # CNF names start with the index, items may share a file name:
    def save_cnf(self, kb : kb_model.KnowledgeBase, index : int, label : str):
        if self.op.cnf_dir == '':
            return
        os.makedirs(self.op.cnf_dir, exist_ok=True)
        cnf_name = os.path.join(self.op.cnf_dir, str(index) + '_' + label.replace(' ', '_') + '.cnf')
        kb.solver_model.write_dimacs(cnf_name, kb.name)
        logging.info('CNF saved to ' + cnf_name)

    def process_item(self, item : InputItem):
        print('\nCalculating statistics for ' + item.label() + '...')
        if item.kind == ItemKind.KB:
            kb = kb_benchmarks.build_knowledge_base(item.key).build()
            return kb_metrics.compute_base_statistics(kb), kb
        fm = fm_parsers.parse_feature_model(item.key)
        kb = kb_model.feature_model_kb(fm).build()
        return kb_metrics.compute_fm_statistics(fm, kb), kb

    def run(self):
        items = self.resolve_inputs()
        for item in items:
            self.state = RunState.PROCESSING_ITEM
            try:
                rec, kb = self.process_item(item)
            except ITEM_ERRORS as e:
                logging.error(item.label() + ' : ' + str(e))
                print('Failed - ' + item.label() + ' : ' + str(e))
                self.results.append(ItemResult(item, error=e))
                if self.op.stop_error:
                    self.state = RunState.ABORTED
                    raise
                continue
            self.counter += 1
            rec.index = self.counter
            self.save_cnf(kb, rec.index, item.label())
            print('Saving statistics to ' + self.op.out_file + '...')
            try:
                self.writer.append(rec)
            except OSError:
                self.state = RunState.ABORTED
                raise
            self.results.append(ItemResult(item, record=rec))
            print('Done - ' + item.label())
        self.state = RunState.DONE
        return self.results

def setup_logging(op : Options):
    if op.log_file != '':
        logging.basicConfig(filename=op.log_file, filemode='w', level=logging.INFO)
    else:
        logging.basicConfig(level=logging.WARNING)

def main(argv):
    op = Options().read(argv)
    if op.version:
        print('Script ' + script_name + ' of version : ' + version)
        return 0
    if op.help:
        print_usage(Banner)
        return 0
    if len(op.unknown) > 0 or op.out_file == '':
        if len(op.unknown) > 0:
            print('Unknown options : ' + ' '.join(op.unknown))
        else:
            print('Output file is not given')
        print_usage(Banner)
        return 1

    print(Banner.title + ' of version ' + version)
    print(op)
    setup_logging(op)
    logging.info('Options: \n' + str(op))

    try:
        with open(op.out_file, 'w') as ofile:
            batch = BatchRun(op, kb_report.ReportWriter(ofile))
            results = batch.run()
    except (kb_benchmarks.UnsupportedKnowledgeBaseError, ConfigurationError) as e:
        logging.error(str(e))
        print('Configuration error : ' + str(e))
        return 1
    except ITEM_ERRORS as e:
        print('Stopped due to error : ' + str(e))
        return 1

    if op.summary_file != '':
        kb_report.write_summary([r.record for r in results if r.record is not None], op.summary_file)
        print('Summary saved to ' + op.summary_file)

    failed = [r for r in results if r.error is not None]
    for r in failed:
        print('Not processed : ' + r.item.label() + ' (' + str(r.error) + ')')
    print('\nDONE.')
    return 1 if len(failed) > 0 else 0

if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
