"""
parameters - X!Tandem parameter groups
======================================

Summary
-------

An X!Tandem output file carries its run configuration and run statistics in
``<group type="parameters">`` elements, each a flat list of
``<note label="...">value</note>`` children. This module maps the note labels
to the short canonical keys used throughout pytandem and derives the ion-series
flags that control which per-series scores are extracted.

  :py:func:`read_parameter_group` - read one parameter group element into a
  :py:class:`~pytandem.auxiliary.Parameters` mapping.

  :py:class:`IonFlags` - the immutable set of six ion-series flags.

Label tables
------------

  :py:data:`INPUT_PARAMETERS` - labels of the ``input parameters`` and
  ``unused input parameters`` groups.

  :py:data:`PERFORMANCE_PARAMETERS` - labels of the ``performance parameters``
  group.

-------------------------------------------------------------------------------
"""

#   Copyright 2012 Anton Goloborodko, Lev Levitsky
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

import re
from collections import namedtuple

from .auxiliary import Parameters
from .xml import get_attr, get_text, iterchildren

ION_SERIES = ('a', 'b', 'c', 'x', 'y', 'z')

INPUT_PARAMETERS = {
    'spectrum, path': 'SPECTRUMPATH',
    'list path, default parameters': 'DEFAULTPARAMPATH',
    'list path, taxonomy information': 'TAXONOMYINFOPATH',
    'output, histogram column width': 'HISTOCOLWIDTH',
    'output, histograms': 'HISTOEXIST',
    'output, logpath': 'LOGPATH',
    'output, maximum valid expectation value': 'MAXVALIDEXPECT',
    'output, message': 'OUTPUTMESSAGE',
    'output, one sequence copy': 'ONESEQCOPY',
    'output, parameters': 'OUTPUTPARAMS',
    'output, path': 'OUTPUTPATH',
    'output, path hashing': 'OUTPUTPATHHASH',
    'output, performance': 'OUTPUTPERFORMANCE',
    'output, proteins': 'OUTPUTPROTEINS',
    'output, results': 'OUTPUTRESULTS',
    'output, sequence path': 'OUTPUTSEQPATH',
    'output, sequences': 'OUTPUTSEQUENCES',
    'output, sort results by': 'OUTPUTSORTRESULTS',
    'output, spectra': 'OUTPUTSPECTRA',
    'output, xsl path': 'OUTPUTSXSLPATH',
    'protein, c-terminal residue modification mass': 'C_TERMRESMODMASS',
    'protein, n-terminal residue modification mass': 'N_TERMRESMODMASS',
    'protein, cleavage c-terminal mass change': 'C_TERMCLEAVMASSCHANGE',
    'protein, cleavage n-terminal mass change': 'N_TERMCLEAVMASSCHANGE',
    'protein, cleavage site': 'CLEAVAGESITE',
    'protein, homolog management': 'HOMOLOGMANAGE',
    'protein, modified residue mass file': 'MODRESMASSFILE',
    'protein, taxon': 'TAXON',
    'refine': 'REFINE',
    'refine, maximum valid expectation value': 'REFINEMAXVALIDEXPECT',
    'refine, modification mass': 'REFINEMODMASS',
    'refine, point mutations': 'POINTMUTATIONS',
    'refine, potential c-terminus modifications': 'POTC_TERMMODS',
    'refine, potential n-terminus modifications': 'POTN_TERMMODS',
    'refine, potential modification mass': 'POTMODMASS',
    'refine, potential modification motif': 'POTMODMOTIF',
    'refine, sequence path': 'REFINESEQPATH',
    'refine, spectrum synthesis': 'REFINESPECSYTNH',
    'refine, tic percent': 'REFINETIC',
    'refine, unanticipated cleavage': 'REFINEUNANTICLEAV',
    'refine, use potential modifications for full refinement': 'POTMODSFULLREFINE',
    'residue, modification mass': 'RESIDUEMODMASS',
    'residue, potential modification mass': 'RESIDUEPOTMODMASS',
    'residue, potential modification motif': 'RESIDUEPOTMODMOTIV',
    'scoring, a ions': 'SCORING_AIONS',
    'scoring, b ions': 'SCORING_BIONS',
    'scoring, c ions': 'SCORING_CIONS',
    'scoring, x ions': 'SCORING_XIONS',
    'scoring, y ions': 'SCORING_YIONS',
    'scoring, z ions': 'SCORING_ZIONS',
    'scoring, cyclic permutation': 'SCORINGCYCLPERM',
    'scoring, include reverse': 'SCORINGINCREV',
    'scoring, maximum missed cleavage sites': 'SCORINGMISSCLEAV',
    'scoring, minimum ion count': 'SCORINGMINIONCOUNT',
    'scoring, pluggable scoring': 'SCORINGPLUGSCORING',
    'scoring, algorithm': 'SCORING_ALGORITHM',
    'spectrum, dynamic range': 'SPECDYNRANGE',
    'spectrum, fragment mass type': 'SPECFRAGMASSTYPE',
    'spectrum, fragment monoisotopic mass error': 'SPECMONOISOMASSERROR',
    'spectrum, fragment monoisotopic mass error units': 'SPECMONOISOMASSERRORUNITS',
    'spectrum, maximum parent charge': 'SPECMAXPRECURSORCHANGE',
    'spectrum, minimum fragment mz': 'SPECMINFRAGMZ',
    'spectrum, minimum parent m+h': 'SPECMINPRECURSORMZ',
    'spectrum, minimum peaks': 'SPECMINPEAKS',
    'spectrum, parent monoisotopic mass error minus': 'SPECPARENTMASSERRORMINUS',
    'spectrum, parent monoisotopic mass error plus': 'SPECPARENTMASSERRORPLUS',
    'spectrum, parent monoisotopic mass error units': 'SPECPARENTMASSERRORUNITS',
    'spectrum, parent monoisotopic mass isotope error': 'SPECPARENTMASSISOERROR',
    'spectrum, sequence batch size': 'SPECBATCHSIZE',
    'spectrum, threads': 'SPECTHREADS',
    'spectrum, total peaks': 'SPECTOTALPEAK',
    'spectrum, use noise suppression': 'SPECUSENOISECOMP',
}

PERFORMANCE_PARAMETERS = {
    'list path, sequence source #1': 'SEQSRC1',
    'list path, sequence source #2': 'SEQSRC2',
    'list path, sequence source #3': 'SEQSRC3',
    'list path, sequence source description #1': 'SEQSRCDESC1',
    'list path, sequence source description #2': 'SEQSRCDESC2',
    'list path, sequence source description #3': 'SEQSRCDESC3',
    'modelling, estimated false positives': 'ESTFP',
    'modelling, spectrum noise suppression ratio': 'NOISESUPP',
    'modelling, total peptides used': 'TOTALPEPUSED',
    'modelling, total proteins used': 'TOTALPROTUSED',
    'modelling, total spectra assigned': 'TOTALSPECASS',
    'modelling, total spectra used': 'TOTALSPECUSED',
    'modelling, total unique assigned': 'TOTALUNIQUEASS',
    'process, start time': 'PROCSTART',
    'process, version': 'PROCVER',
    'quality values': 'QUALVAL',
    'refining, # input models': 'INPUTMOD',
    'refining, # input spectra': 'INPUTSPEC',
    'refining, # partial cleavage': 'PARTCLEAV',
    'refining, # point mutations': 'POINTMUT',
    'refining, # potential c-terminii': 'POTC_TERM',
    'refining, # potential n-terminii': 'POTN_TERM',
    'refining, # unanticipated cleavage': 'UNANTICLEAV',
    'timing, initial modelling total (sec)': 'INITMODELTOTALTIME',
    'timing, initial modelling/spectrum (sec)': 'INITMODELSPECTIME',
    'timing, load sequence models (sec)': 'LOADSEQMODELTIME',
    'timing, refinement/spectrum (sec)': 'REFINETIME',
}

# group labels (lower case) -> (label table, only read notes of type "input")
PARAMETER_GROUPS = {
    'input parameters': (INPUT_PARAMETERS, True),
    'unused input parameters': (INPUT_PARAMETERS, True),
    'performance parameters': (PERFORMANCE_PARAMETERS, False),
}

# reading of a group stops after this label
TERMINATOR = 'spectrum, path'

_numbered_label = re.compile(
    r'^(?P<base>[^,]+, (?:potential modification mass|potential modification motif|modification mass)) (?P<n>\d+)$')


def canonical_key(label, table):
    """Map a note label to its canonical key.

    Parameters
    ----------
    label : str
        The ``label`` attribute of a ``note`` element.
    table : dict
        One of :py:data:`INPUT_PARAMETERS` or :py:data:`PERFORMANCE_PARAMETERS`.

    Returns
    -------
    out : str or None
        The canonical key, with the index appended for numbered labels
        (``'residue, modification mass 2'`` -> ``'RESIDUEMODMASS_2'``), or
        :py:const:`None` if the label is not recognized.
    """
    key = table.get(label.lower())
    if key is not None:
        return key
    match = _numbered_label.match(label)
    if match:
        base = table.get(match.group('base').lower())
        if base is not None:
            return '{}_{}'.format(base, match.group('n'))
    return None


def read_parameter_group(element, table, input_only=False, parameters=None):
    """Read the ``note`` children of a parameter group.

    Unrecognized labels are skipped. Reading stops right after the
    ``spectrum, path`` note.

    Parameters
    ----------
    element : lxml.etree.Element
        A ``<group type="parameters">`` element.
    table : dict
        Label table to map labels to canonical keys.
    input_only : bool, optional
        If :py:const:`True`, only notes with ``type="input"`` are read.
    parameters : Parameters, optional
        A mapping to update. A new one is created by default.

    Returns
    -------
    out : Parameters
    """
    if parameters is None:
        parameters = Parameters()
    for note in iterchildren(element, 'note'):
        label = get_attr(note, 'label')
        if label is None:
            continue
        if input_only and (get_attr(note, 'type') or '').lower() != 'input':
            continue
        key = canonical_key(label, table)
        if key is not None:
            value = get_text(note)
            parameters[key] = value if value is not None else ''
        if label.lower() == TERMINATOR:
            break
    return parameters


class IonFlags(namedtuple('IonFlags', ION_SERIES)):
    """Which fragment ion series were scored in the run.

    A series is enabled iff its ``scoring, <series> ions`` parameter is ``"yes"``.
    """
    __slots__ = ()

    @classmethod
    def from_parameters(cls, parameters):
        return cls(*(parameters.get('SCORING_{}IONS'.format(s.upper())) == 'yes'
            for s in ION_SERIES))

    def enabled(self, series=ION_SERIES):
        """Return the enabled series among `series`, in order."""
        return tuple(s for s in series if getattr(self, s))
