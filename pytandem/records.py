"""
records - extracted X!Tandem entities
=====================================

Summary
-------

Everything extracted from an X!Tandem file is represented by immutable
records, one type per level of the identification hierarchy:

  :py:class:`Spectrum` - one ``<group type="model">``.

  :py:class:`ProteinMatch` - a ``<protein>`` of a spectrum group.

  :py:class:`PeptideSpan` - a ``<peptide>`` of a protein.

  :py:class:`Domain` - a ``<domain>`` (peptide-spectrum match) of a peptide.

  :py:class:`ResidueModification` - an ``<aa>`` of a domain.

  :py:class:`SupportData` and :py:class:`Trace` - the supporting traces of a
  spectrum group.

Records are addressed by the ordinals of their ancestors, available as the
:py:attr:`identity` tuple of each record. The historical composite keys
(``s3_p2_d1_m1``) are available as the :py:attr:`key` property and are used by
:py:class:`TandemResult` to rebuild the legacy flat maps
(:py:meth:`TandemResult.raw_peptide_map` etc.). Composite keys carry no peptide
ordinal, so the domains of two peptides of one protein can share a key.

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

import warnings
from collections import namedtuple, OrderedDict

from .auxiliary import Parameters, parse_values
from .parameters import ION_SERIES


def composite_key(spectrum, protein=None, domain=None, modification=None):
    """Build the composite key for the given ordinals.

    >>> composite_key(3, 2, 1)
    's3_p2_d1'
    """
    parts = ['s{}'.format(spectrum)]
    for prefix, ordinal in zip('pdm', (protein, domain, modification)):
        if ordinal is None:
            break
        parts.append('{}{}'.format(prefix, ordinal))
    return '_'.join(parts)


def _record(name, fields):
    return namedtuple(name, fields, defaults=(None,) * len(fields))


SPECTRUM_FIELDS = ('id', 'z', 'expect', 'mh', 'rt', 'label', 'sumI', 'maxI', 'fI')


class Spectrum(_record('Spectrum', ('index',) + SPECTRUM_FIELDS)):
    """One identified spectrum; `index` is its 1-based position in the file."""
    __slots__ = ()

    @property
    def key(self):
        return composite_key(self.index)

    @property
    def identity(self):
        return (self.index,)


class ProteinMatch(_record('ProteinMatch', (
        'spectrum', 'ordinal', 'id', 'uid', 'label', 'expect', 'sumI', 'description', 'url'))):
    """A protein of a spectrum group; `ordinal` restarts at 1 in every spectrum."""
    __slots__ = ()

    @property
    def key(self):
        return composite_key(self.spectrum, self.ordinal)

    @property
    def identity(self):
        return (self.spectrum, self.ordinal)


class PeptideSpan(_record('PeptideSpan', (
        'spectrum', 'protein', 'ordinal', 'protein_id', 'start', 'end', 'seq'))):
    """A peptide of a protein. `protein_id` is the ``id`` of the owning protein."""
    __slots__ = ()

    @property
    def key(self):
        return composite_key(self.spectrum, self.protein)

    @property
    def identity(self):
        return (self.spectrum, self.protein, self.ordinal)


IonScore = namedtuple('IonScore', ('score', 'ions'))


class Domain(_record('Domain', (
        'spectrum', 'protein', 'peptide', 'ordinal', 'id', 'start', 'end', 'protein_key',
        'mh', 'delta', 'hyperscore', 'nextscore', 'ion_scores', 'pre', 'post',
        'missed_cleavages', 'expect', 'seq'))):
    """A peptide-spectrum match. `ordinal` restarts at 1 in every peptide.

    `ion_scores` maps each enabled ion series to an :py:class:`IonScore`.
    """
    __slots__ = ()

    @property
    def key(self):
        return composite_key(self.spectrum, self.protein, self.ordinal)

    @property
    def identity(self):
        return (self.spectrum, self.protein, self.peptide, self.ordinal)


class ResidueModification(_record('ResidueModification', (
        'spectrum', 'protein', 'peptide', 'domain', 'ordinal', 'type', 'at', 'modified',
        'name', 'pm', 'position'))):
    """A modified residue of a domain.

    `name` is ``"<mass>@<residue>"``; `at` is the residue position in the
    protein and `position` the 1-based position within the domain (if the
    domain start is known).
    """
    __slots__ = ()

    @property
    def key(self):
        return composite_key(self.spectrum, self.protein, self.domain, self.ordinal)

    @property
    def identity(self):
        return (self.spectrum, self.protein, self.peptide, self.domain, self.ordinal)

    @property
    def domain_identity(self):
        """The :py:attr:`Domain.identity` of the owning domain."""
        return (self.spectrum, self.protein, self.peptide, self.domain)


class Trace(_record('Trace', ('label', 'x', 'y', 'attributes'))):
    """A GAML trace. `x` and `y` are kept as the original delimited strings."""
    __slots__ = ()

    def arrays(self, dtype=float):
        """Return `x` and `y` as :py:class:`numpy.ndarray` objects."""
        return parse_values(self.x, dtype), parse_values(self.y, dtype)


class SupportData(_record('SupportData', (
        'spectrum', 'hyperscore', 'convolution', 'ion_histograms', 'title', 'fragment'))):
    """Supporting data of a spectrum group.

    `hyperscore` carries the ``a0`` and ``a1`` coefficients in its attributes,
    `ion_histograms` maps enabled ion series to traces and `fragment` is the
    tandem mass spectrum with ``m+h`` and ``charge`` attributes. Attribute
    types are stored in lower case.
    """
    __slots__ = ()

    @property
    def precursor_mh(self):
        if self.fragment is not None:
            return self.fragment.attributes.get('m+h')

    @property
    def precursor_charge(self):
        if self.fragment is not None:
            return self.fragment.attributes.get('charge')


SpectrumIdentification = namedtuple('SpectrumIdentification', (
    'spectrum', 'proteins', 'peptides', 'domains', 'modifications', 'support', 'title'))
SpectrumIdentification.__doc__ = """All records extracted from one spectrum group."""


class TandemResult(object):
    """The records extracted from one X!Tandem file.

    Records are kept in document order in the lists :py:attr:`spectra`,
    :py:attr:`proteins`, :py:attr:`peptides`, :py:attr:`domains`,
    :py:attr:`modifications` and :py:attr:`support`. The lookups accept a
    record's :py:attr:`identity` tuple, which is unique, or its legacy composite
    key. Legacy keys follow the old convention: if two records share a key, the
    later one wins.

    .. note:: :py:meth:`protein_by_label` is a lossy index. X!Tandem does not
        guarantee that protein labels (or ids) are unique, and when two
        different proteins share a label, only the last one is returned.
    """

    def __init__(self, parameters=None, statistics=None, ion_flags=None, skip_details=False):
        self.parameters = parameters if parameters is not None else Parameters()
        self.statistics = statistics if statistics is not None else Parameters()
        self.ion_flags = ion_flags
        self.skip_details = skip_details
        self.spectra = []
        self.proteins = []
        self.peptides = []
        self.domains = []
        self.modifications = []
        self.support = []
        self.title_to_index = {}
        self.index_to_title = {}
        self._labels = OrderedDict()
        self._keys = {kind: {} for kind in ('protein', 'peptide', 'domain', 'modification')}
        self._identities = {kind: {} for kind in self._keys}
        self._support = {}

    def add(self, identification):
        """Append the records of one spectrum group."""
        spectrum = identification.spectrum
        if spectrum.index != len(self.spectra) + 1:
            raise ValueError('Spectrum #{} added after #{}'.format(spectrum.index, len(self.spectra)))
        self.spectra.append(spectrum)
        for protein in identification.proteins:
            previous = self._labels.get(protein.label)
            if (previous is not None and previous.uid is not None and protein.uid is not None
                    and previous.uid != protein.uid):
                warnings.warn('Protein label {!r} is shared by uids {} and {}; label lookups '
                    'will return the latter.'.format(protein.label, previous.uid, protein.uid))
            self._labels[protein.label] = protein
        for kind, records in [('protein', identification.proteins),
                              ('peptide', identification.peptides),
                              ('domain', identification.domains),
                              ('modification', identification.modifications)]:
            getattr(self, kind + 's').extend(records)
            keys, identities = self._keys[kind], self._identities[kind]
            for record in records:
                keys[record.key] = record
                identities[record.identity] = record
        if identification.support is not None:
            self.support.append(identification.support)
            self._support[spectrum.index] = identification.support
        title = identification.title
        if title is not None:
            if title in self.title_to_index:
                warnings.warn('Spectrum title {!r} is used by spectra #{} and #{}.'.format(
                    title, self.title_to_index[title], spectrum.index))
            self.title_to_index[title] = spectrum.index
            self.index_to_title[spectrum.index] = title

    def __len__(self):
        return len(self.spectra)

    @property
    def number_of_spectra(self):
        return len(self.spectra)

    @property
    def protein_labels(self):
        """Protein labels in the order they were first seen."""
        return list(self._labels)

    def spectrum(self, index):
        """Return the :py:class:`Spectrum` with 1-based `index`."""
        if index < 1:
            raise IndexError(index)
        return self.spectra[index - 1]

    def _lookup(self, kind, key):
        if isinstance(key, tuple):
            return self._identities[kind][key]
        return self._keys[kind][key]

    def protein(self, key):
        return self._lookup('protein', key)

    def protein_by_label(self, label):
        return self._labels[label]

    def peptide(self, key):
        return self._lookup('peptide', key)

    def domain(self, key):
        return self._lookup('domain', key)

    def modification(self, key):
        return self._lookup('modification', key)

    def support_data(self, index):
        return self._support[index]

    def domain_modifications(self, domain):
        """Return the modifications of `domain`, a :py:class:`Domain` or its identity."""
        identity = domain.identity if isinstance(domain, Domain) else domain
        return [m for m in self.modifications if m.domain_identity == identity]

    # legacy flat maps

    def raw_spectrum_map(self):
        """Spectrum attributes keyed by ``<attribute><spectrum index>``."""
        out = {}
        for spectrum in self.spectra:
            for field in SPECTRUM_FIELDS:
                _put(out, field + str(spectrum.index), getattr(spectrum, field))
        return out

    def raw_protein_map(self):
        """Protein attributes keyed by ``<attribute><protein label>``."""
        out = {}
        for protein in self.proteins:
            for field in ('uid', 'expect', 'label', 'sumI', 'description'):
                _put(out, field + protein.label, getattr(protein, field))
        return out

    def raw_peptide_map(self):
        """Peptide and domain attributes keyed by composite keys."""
        out = {}
        for protein in self.proteins:
            _put(out, 'URL_' + protein.key, protein.url)
        for peptide in self.peptides:
            key = peptide.key
            _put(out, key, peptide.protein_id)
            for field in ('start', 'end', 'seq'):
                _put(out, '{}_{}'.format(field, key), getattr(peptide, field))
        for domain in self.domains:
            key = domain.key
            _put(out, 'domainid_' + key, domain.id)
            _put(out, 'domainstart_' + key, domain.start)
            _put(out, 'proteinkey_' + key, domain.protein_key)
            _put(out, 'domainend_' + key, domain.end)
            for field in ('mh', 'delta', 'hyperscore', 'nextscore'):
                _put(out, '{}_{}'.format(field, key), getattr(domain, field))
            for series in ION_SERIES:
                if domain.ion_scores and series in domain.ion_scores:
                    score = domain.ion_scores[series]
                    _put(out, '{}_score_{}'.format(series, key), score.score)
                    _put(out, '{}_ions_{}'.format(series, key), score.ions)
            for field in ('pre', 'post', 'missed_cleavages', 'expect'):
                _put(out, '{}_{}'.format(field, key), getattr(domain, field))
            _put(out, 'domainseq_' + key, domain.seq)
        return out

    def raw_modification_map(self):
        """Modification attributes keyed by composite keys."""
        out = {}
        for mod in self.modifications:
            key = mod.key
            for field in ('at', 'modified', 'name', 'pm'):
                _put(out, '{}_{}'.format(field, key), getattr(mod, field))
        return out

    def support_data_map(self):
        """Supporting data keyed by ``<KIND>_s<spectrum index>``."""
        out = {}
        for support in self.support:
            suffix = '_s{}'.format(support.spectrum)
            hyper = support.hyperscore
            if hyper is not None:
                _put(out, 'HYPERLABEL' + suffix, hyper.label)
                _put(out, 'HYPER_A0' + suffix, hyper.attributes.get('a0'))
                _put(out, 'HYPER_A1' + suffix, hyper.attributes.get('a1'))
                _put(out, 'XVAL_HYPER' + suffix, hyper.x)
                _put(out, 'YVAL_HYPER' + suffix, hyper.y)
            convolution = support.convolution
            if convolution is not None:
                _put(out, 'CONVOLLABEL' + suffix, convolution.label)
                _put(out, 'XVAL_CONVOL' + suffix, convolution.x)
                _put(out, 'YVAL_CONVOL' + suffix, convolution.y)
            for series, trace in (support.ion_histograms or {}).items():
                s = series.upper()
                _put(out, '{}_IONLABEL{}'.format(s, suffix), trace.label)
                _put(out, 'XVAL_{}IONS{}'.format(s, suffix), trace.x)
                _put(out, 'YVAL_{}IONS{}'.format(s, suffix), trace.y)
            _put(out, 'FRAGIONSPECDESC' + suffix, support.title)
            fragment = support.fragment
            if fragment is not None:
                _put(out, 'SPECTRUMLABEL' + suffix, fragment.label)
                _put(out, 'FRAGIONMZ' + suffix, fragment.attributes.get('m+h'))
                _put(out, 'FRAGIONCHARGE' + suffix, fragment.attributes.get('charge'))
                _put(out, 'XVAL_FRAGIONMZ' + suffix, fragment.x)
                _put(out, 'YVAL_FRAGIONMZ' + suffix, fragment.y)
        return out


def _put(mapping, key, value):
    if value is not None:
        mapping[key] = value
