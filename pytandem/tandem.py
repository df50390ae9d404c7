"""
tandem - X!Tandem output file reader
====================================

Summary
-------

`X!Tandem <http://thegpm.org/tandem/>`_ writes its results into a ``bioml``
XML file. The output format is described
`here (PDF) <http://www.thegpm.org/docs/X_series_output_form.pdf>`_.

Every ``<group type="model">`` element of the file holds the best
identification for one spectrum: the proteins, the peptides, the
peptide-spectrum matches (domains) and the modified residues, plus the
supporting statistical traces and the fragment ion spectrum. The parameter
groups that describe the search run are usually written after all model
groups, so the file is read in two passes: the first one reads the parameter
groups, the second one walks the model groups.

Data access
-----------

  :py:class:`TandemXML` - a class representing a single X!Tandem output file.
  Iterating over it yields a
  :py:class:`~pytandem.records.SpectrumIdentification` per spectrum.

  :py:func:`read` - the functional interface, same as :py:class:`TandemXML`.

  :py:func:`extract` - read a whole file into a
  :py:class:`~pytandem.records.TandemResult`.

  :py:func:`chain` - read multiple files at once.

  :py:func:`chain.from_iterable` - read multiple files at once, using an
  iterable of files.

  :py:func:`DataFrame` - read X!Tandem output files into a :py:class:`pandas.DataFrame`.

Miscellaneous
-------------

  :py:func:`is_decoy` - determine if a spectrum identification is from the
  decoy database.

Dependencies
------------

This module requires :py:mod:`lxml` and :py:mod:`numpy`.
:py:func:`DataFrame` requires :py:mod:`pandas`.

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

import sys
import warnings

from . import xml, auxiliary as aux
from .xml import _local_name, _name, _keepstate, get_attr, require_attr, get_text, iterchildren
from .parameters import PARAMETER_GROUPS, IonFlags, read_parameter_group
from .records import (Spectrum, ProteinMatch, PeptideSpan, Domain, IonScore,
    ResidueModification, Trace, SupportData, SpectrumIdentification, TandemResult)

# histogram trace types and the ion series each one is reported for
_HISTOGRAMS = {
    'b ion histogram': ('a', 'b', 'c'),
    'y ion histogram': ('x', 'y', 'z'),
}

# per-series domain attributes fall back to the histogram series; the legacy
# reader always took a/c from b_* and x/z from y_*, here own attributes win
_SCORE_FALLBACK = {'a': 'b', 'c': 'b', 'x': 'y', 'z': 'y'}


class TandemXML(xml.XML):
    """Parser class for X!Tandem output files.

    Iterating over an instance yields one
    :py:class:`~pytandem.records.SpectrumIdentification` per
    ``<group type="model">`` element, in document order.

    Attributes
    ----------
    parameters : Parameters
        The run parameters (``input parameters`` and
        ``unused input parameters`` groups).
    statistics : Parameters
        The run statistics (``performance parameters`` group).
    ion_flags : IonFlags
        The ion series enabled in the run.
    skip_details : bool
        Whether the reader runs in summary mode.
    """
    file_format = "X!Tandem XML"
    _root_element = "bioml"
    _model_type = "model"
    _parameters_type = "parameters"

    def __init__(self, source, skip_details=False, **kwargs):
        """Create a :py:class:`TandemXML` object.

        Parameters
        ----------
        source : str or file
            File name or file-like object corresponding to an X!Tandem output file.
        skip_details : bool, optional
            If :py:const:`True`, only the spectrum identifiers, the protein
            labels, the peptide-to-protein linkage, the domain identity and the
            modifications are extracted, and supporting data are skipped.
            Default is :py:const:`False`.
        huge_tree : bool, optional
            Passed to the :py:mod:`lxml` parser. Default is :py:const:`False`.
        """
        self.skip_details = skip_details
        super(TandemXML, self).__init__(source, **kwargs)
        try:
            self.parameters, self.statistics = self._read_parameters()
        except Exception:
            self.__exit__(*sys.exc_info())
            raise
        self.ion_flags = IonFlags.from_parameters(self.parameters)

    @_keepstate
    def _read_parameters(self):
        """First pass: read all parameter groups of the file."""
        parameters, statistics = aux.Parameters(), aux.Parameters()
        targets = {True: parameters, False: statistics}
        root_seen = False
        for event, elem in self.iterparse():
            if event == 'start':
                if not root_seen:
                    root_seen = True
                    if _local_name(elem) != self._root_element:
                        warnings.warn('{}: root element is <{}>, expected <{}>.'.format(
                            self.source_name, _local_name(elem), self._root_element))
                continue
            if _name(elem) != 'group':
                continue
            if get_attr(elem, 'type') == self._parameters_type:
                label = (get_attr(elem, 'label') or '').lower()
                if label in PARAMETER_GROUPS:
                    table, input_only = PARAMETER_GROUPS[label]
                    read_parameter_group(elem, table, input_only, targets[input_only])
            elem.clear()
        return parameters, statistics

    def _iterate(self, **kwargs):
        """Second pass: walk the model groups."""
        index = 0
        depth = 0
        for event, elem in self.iterparse():
            if event == 'start':
                if depth:
                    depth += 1
                elif _name(elem) == 'group' and get_attr(elem, 'type') == self._model_type:
                    depth = 1
                    index += 1
            else:
                if depth:
                    depth -= 1
                    if depth:
                        continue
                    yield self._read_spectrum(elem, index)
                elem.clear()

    def extract(self):
        """Read the whole file.

        The file is released if the extraction fails.

        Returns
        -------
        out : TandemResult
        """
        result = TandemResult(self.parameters, self.statistics, self.ion_flags, self.skip_details)
        self.reset()
        try:
            self.seek(0)
            for identification in self:
                result.add(identification)
        except Exception:
            self.__exit__(*sys.exc_info())
            raise
        return result

    def _read_spectrum(self, group, index):
        """Read a ``<group type="model">`` element into a
        :py:class:`SpectrumIdentification`. `index` is the 1-based spectrum
        ordinal."""
        if self.skip_details:
            spectrum = Spectrum(index, get_attr(group, 'id'), get_attr(group, 'z'))
        else:
            spectrum = Spectrum(index, *(get_attr(group, name) for name in Spectrum._fields[1:]))
        out = SpectrumIdentification(spectrum, [], [], [], [], None, None)
        support = title = fragment = None
        ordinal = 0
        for child in iterchildren(group, 'protein', 'group'):
            if _name(child) == 'protein':
                ordinal += 1
                self._read_protein(child, index, ordinal, out)
                continue
            label = (get_attr(child, 'label') or '').lower()
            if label == 'supporting data' and not self.skip_details:
                support = self._read_support(child, index)
            elif label == 'fragment ion mass spectrum':
                title, fragment = self._read_fragment_spectrum(child, index)
        if self.skip_details:
            return out._replace(title=title)
        if support is None and (title is not None or fragment is not None):
            support = SupportData(index, ion_histograms={})
        if support is not None:
            support = support._replace(title=title, fragment=fragment)
        return out._replace(support=support, title=title)

    def _read_protein(self, element, spectrum, ordinal, out):
        label = require_attr(element, 'label', spectrum)
        if self.skip_details:
            protein = ProteinMatch(spectrum, ordinal, get_attr(element, 'id'),
                label=label, expect=get_attr(element, 'expect'))
        else:
            description = url = None
            for child in iterchildren(element, 'note', 'file'):
                if _name(child) == 'file':
                    url = get_attr(child, 'URL')
                elif (get_attr(child, 'label') or '').lower() == 'description':
                    description = get_text(child)
            protein = ProteinMatch(spectrum, ordinal, get_attr(element, 'id'),
                get_attr(element, 'uid'), label, get_attr(element, 'expect'),
                get_attr(element, 'sumI'), description, url)
        out.proteins.append(protein)
        for i, child in enumerate(iterchildren(element, 'peptide'), 1):
            self._read_peptide(child, protein, i, out)

    def _read_peptide(self, element, protein, ordinal, out):
        if self.skip_details:
            peptide = PeptideSpan(protein.spectrum, protein.ordinal, ordinal, protein.id)
        else:
            peptide = PeptideSpan(protein.spectrum, protein.ordinal, ordinal, protein.id,
                get_attr(element, 'start'), get_attr(element, 'end'),
                ''.join((element.text or '').split()))
        out.peptides.append(peptide)
        for i, child in enumerate(iterchildren(element, 'domain'), 1):
            self._read_domain(child, protein, peptide, i, out)

    def _read_domain(self, element, protein, peptide, ordinal, out):
        spectrum = peptide.spectrum
        domain_id = require_attr(element, 'id', spectrum)
        common = dict(spectrum=spectrum, protein=peptide.protein, peptide=peptide.ordinal,
            ordinal=ordinal, id=domain_id, start=get_attr(element, 'start'),
            expect=get_attr(element, 'expect'), seq=get_attr(element, 'seq'))
        if self.skip_details:
            domain = Domain(**common)
        else:
            domain = Domain(end=get_attr(element, 'end'), protein_key=protein.label,
                mh=get_attr(element, 'mh'), delta=get_attr(element, 'delta'),
                hyperscore=get_attr(element, 'hyperscore'),
                nextscore=get_attr(element, 'nextscore'),
                ion_scores=self._read_ion_scores(element),
                pre=get_attr(element, 'pre'), post=get_attr(element, 'post'),
                missed_cleavages=get_attr(element, 'missed_cleavages'), **common)
        out.domains.append(domain)
        for i, child in enumerate(iterchildren(element, 'aa'), 1):
            out.modifications.append(self._read_aa(child, domain, i))

    def _read_ion_scores(self, element):
        scores = {}
        for series in self.ion_flags.enabled():
            score = get_attr(element, series + '_score')
            ions = get_attr(element, series + '_ions')
            if score is None and ions is None and series in _SCORE_FALLBACK:
                fallback = _SCORE_FALLBACK[series]
                score = get_attr(element, fallback + '_score')
                ions = get_attr(element, fallback + '_ions')
            scores[series] = IonScore(score, ions)
        return scores

    def _read_aa(self, element, domain, ordinal):
        residue = require_attr(element, 'type', domain.spectrum)
        modified = require_attr(element, 'modified', domain.spectrum)
        try:
            mass = float(modified)
        except ValueError:
            raise aux.StructureError('<aa> element has a non-numeric "modified" attribute: {!r}'.format(
                modified), _local_name(element), 'modified', domain.spectrum, element.sourceline)
        at = get_attr(element, 'at')
        try:
            position = int(at) - int(domain.start) + 1
        except (TypeError, ValueError):
            position = None
        return ResidueModification(domain.spectrum, domain.protein, domain.peptide,
            domain.ordinal, ordinal, residue, at, modified,
            '{}@{}'.format(mass, residue), get_attr(element, 'pm'), position)

    def _read_trace(self, element):
        attributes = {}
        x = y = None
        for child in iterchildren(element, 'attribute', 'xdata', 'ydata'):
            name = _name(child)
            if name == 'attribute':
                kind = get_attr(child, 'type')
                if kind is not None:
                    attributes[kind.lower()] = get_text(child)
                continue
            values = next(iterchildren(child, 'values'), None)
            text = get_text(values) if values is not None else None
            if name == 'xdata':
                x = text
            else:
                y = text
        return Trace(get_attr(element, 'label'), x, y, attributes)

    def _read_support(self, group, spectrum):
        """Read the score distribution traces of a ``supporting data`` group."""
        hyperscore = convolution = None
        histograms = {}
        for trace in iterchildren(group, 'trace'):
            kind = (get_attr(trace, 'type') or '').lower()
            if kind == 'hyperscore expectation function':
                hyperscore = self._read_trace(trace)
            elif kind == 'convolution survival function':
                convolution = self._read_trace(trace)
            elif kind in _HISTOGRAMS:
                series = self.ion_flags.enabled(_HISTOGRAMS[kind])
                if series:
                    histogram = self._read_trace(trace)
                    for s in series:
                        histograms[s] = histogram
        return SupportData(spectrum, hyperscore, convolution, histograms)

    def _read_fragment_spectrum(self, group, spectrum):
        """Read the title and the ``tandem mass spectrum`` trace of a
        ``fragment ion mass spectrum`` group."""
        title = fragment = None
        for child in iterchildren(group):
            if title is None and _name(child) != 'trace':
                title = get_text(child)
            elif (fragment is None and not self.skip_details and _name(child) == 'trace'
                    and (get_attr(child, 'type') or '').lower() == 'tandem mass spectrum'):
                fragment = self._read_trace(child)
        return title, fragment


def read(source, skip_details=False, **kwargs):
    """Parse `source` and iterate through spectrum identifications.

    Parameters
    ----------
    source : str or file
        A path to a target X!Tandem output file or the file object itself.
    skip_details : bool, optional
        Summary mode, see :py:class:`TandemXML`. Default is :py:const:`False`.
    huge_tree : bool, optional
        Passed to the :py:mod:`lxml` parser. Default is :py:const:`False`.

    Returns
    -------
    out : TandemXML
        An iterator over :py:class:`~pytandem.records.SpectrumIdentification`
        objects.
    """
    return TandemXML(source, skip_details=skip_details, **kwargs)


def extract(source, skip_details=False, **kwargs):
    """Read a whole X!Tandem output file.

    Parameters
    ----------
    source : str or file
        A path to a target X!Tandem output file or the file object itself.
    skip_details : bool, optional
        Summary mode, see :py:class:`TandemXML`. Default is :py:const:`False`.
    huge_tree : bool, optional
        Passed to the :py:mod:`lxml` parser. Default is :py:const:`False`.

    Returns
    -------
    out : TandemResult
    """
    with TandemXML(source, skip_details=skip_details, **kwargs) as f:
        return f.extract()


chain = aux._make_chain(read, 'read')


def is_decoy(identification, prefix='DECOY_'):
    """Given a spectrum identification, return :py:const:`True` if all protein
    labels start with ``prefix``, and :py:const:`False` otherwise.

    Parameters
    ----------
    identification : SpectrumIdentification
        As yielded by :py:func:`read`.
    prefix : str, optional
        A prefix used to mark decoy proteins. Default is `'DECOY_'`.

    Returns
    -------
    out : bool
    """
    return all(prot.label.startswith(prefix) for prot in identification.proteins)


_DOMAIN_COLUMNS = [('domain_id', 'id'), ('domain_start', 'start'), ('domain_end', 'end'),
    ('domain_expect', 'expect'), ('domain_mh', 'mh'), ('seq', 'seq'), ('delta', 'delta'),
    ('hyperscore', 'hyperscore'), ('nextscore', 'nextscore'), ('pre', 'pre'), ('post', 'post'),
    ('missed_cleavages', 'missed_cleavages')]


def DataFrame(*args, **kwargs):
    """Read X!Tandem output files into a :py:class:`pandas.DataFrame`.
    One row is produced per spectrum; the domain columns describe the first
    domain of the spectrum.

    Requires :py:mod:`pandas`.

    Parameters
    ----------
    *args, **kwargs : passed to :py:func:`chain`

    sep : str or None, optional
        Protein and peptide information is variable-length.
        If `sep` is a :py:class:`str`, such values will be packed into a single
        string using this delimiter. If `sep` is :py:const:`None`, they are
        kept as lists. Default is :py:const:`None`.

    Returns
    -------
    out : pandas.DataFrame
    """
    import pandas as pd
    data = []
    prot_keys = ['id', 'uid', 'label', 'expect']
    pep_keys = ['start', 'end']
    sep = kwargs.pop('sep', None)

    def pack(vals):
        if sep is not None:
            return sep.join(str(val) if val is not None else '' for val in vals)
        return vals

    with chain(*args, **kwargs) as f:
        for item in f:
            info = item.spectrum._asdict()
            for key in prot_keys:
                info['protein_' + key] = pack([getattr(prot, key) for prot in item.proteins])
            for key in pep_keys:
                info['peptide_' + key] = pack([getattr(pep, key) for pep in item.peptides])
            if item.domains:
                domain = item.domains[0]
                for column, field in _DOMAIN_COLUMNS:
                    info[column] = getattr(domain, field)
                for series, score in (domain.ion_scores or {}).items():
                    info[series + '_score'] = score.score
                    info[series + '_ions'] = score.ions
                info['modifications'] = ','.join('{:.3f}@{}'.format(float(m.modified), m.type)
                    for m in item.modifications if m.domain_identity == domain.identity)
            info['scan'] = item.title
            data.append(info)
    return pd.DataFrame(data)
