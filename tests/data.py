"""
Expected data for tests/test.t.xml
"""

from pytandem.records import (Spectrum, ProteinMatch, PeptideSpan, Domain, IonScore,
    ResidueModification, Trace, SupportData, SpectrumIdentification)

tandem_parameters = {
    'DEFAULTPARAMPATH': 'default_input.xml',
    'OUTPUTPATH': 'output.t.xml',
    'RESIDUEMODMASS': '57.021@C',
    'RESIDUEMODMASS_2': '79.966@S',
    'RESIDUEPOTMODMASS': '15.995@M',
    'POTMODMASS_1': '0.984@N',
    'SCORING_AIONS': 'no',
    'SCORING_BIONS': 'yes',
    'SCORING_CIONS': 'no',
    'SCORING_XIONS': 'no',
    'SCORING_YIONS': 'yes',
    'SCORING_ZIONS': 'no',
    'SPECTRUMPATH': 'test.mgf',
    'TAXON': 'human',
    'REFINESPECSYTNH': 'yes',
}

tandem_statistics = {
    'SEQSRC1': '/db/test.fasta',
    'TOTALSPECUSED': '2',
    'PROCVER': 'X! Tandem Vengeance (2015.12.15.2)',
    'LOADSEQMODELTIME': '0.01',
}

_test_protein_seq = 'MKTAYIAKQRQCSFMKSHFSRQLEERLGLI'
_decoy_protein_seq = 'MSPEPCTIDEKRSLLGAHKW'
_test_label = 'sp|P12345|TEST'
_decoy_label = 'DECOY_sp|Q99999|REV'

tandem_spectra = [
    SpectrumIdentification(
        Spectrum(1, '101', '2', '1.2e-03', '1234.56', '12.3', _test_label, '5.21', '18500', '185'),
        [ProteinMatch(1, 1, '101.1', '7', _test_label, '-5.0', '5.21',
            'sp|P12345|TEST Test protein', '/db/test.fasta')],
        [PeptideSpan(1, 1, 1, '101.1', '1', '30', _test_protein_seq)],
        [Domain(1, 1, 1, 1, '101.1.1', '10', '20', _test_label, '1234.55', '0.01', '15.2', '10.1',
            {'b': IonScore('3.1', '2'), 'y': IonScore('8.5', '5')},
            'AKQ', 'RQLE', '1', '1.2e-03', 'RQCSFMKSHFS')],
        [ResidueModification(1, 1, 1, 1, 1, 'C', '12', '57.02', '57.02@C', None, 3),
         ResidueModification(1, 1, 1, 1, 2, 'M', '15', '15.995', '15.995@M', None, 6)],
        SupportData(1,
            Trace('101.hyper', '0 1 2', '5 3 1', {'a0': '4.1', 'a1': '-0.2'}),
            Trace('101.convolute', '1 2', '10 5', {}),
            {'b': Trace('101.b', '0 1 2', '3 2 1', {}),
             'y': Trace('101.y', '0 1', '4 1', {})},
            'scan=101 title',
            Trace('101.spectrum', '100.1 200.2\n300.3', '10 20 30', {'m+h': '1234.56', 'charge': '2'})),
        'scan=101 title'),
    SpectrumIdentification(
        Spectrum(2, '205', '3', '0.05', '987.65', '', _decoy_label, '4.1', '9000', '90'),
        [ProteinMatch(2, 1, '205.1', '12', _decoy_label, '-1.3', '4.1',
            'DECOY_sp|Q99999|REV Reversed protein', '/db/test.fasta'),
         ProteinMatch(2, 2, '205.2', '7', _test_label, '-2.0', '3.9',
            'sp|P12345|TEST Test protein', '/db/test.fasta')],
        [PeptideSpan(2, 1, 1, '205.1', '1', '20', _decoy_protein_seq),
         PeptideSpan(2, 2, 1, '205.2', '1', '30', _test_protein_seq)],
        [Domain(2, 1, 1, 1, '205.1.1', '5', '12', _decoy_label, '987.64', '0.01', '12.0', '11.5',
            {'b': IonScore('2.0', '1'), 'y': IonScore('6.0', '4')},
            'MSPE', 'SLLG', '0', '0.05', 'PCTIDEKR'),
         Domain(2, 1, 1, 2, '205.1.2', '9', '13', _decoy_label, '987.60', '0.05', '9.0', '8.0',
            {'b': IonScore('1.0', '1'), 'y': IonScore('4.0', '2')},
            'CTI', 'LLGA', '1', '0.9', 'DEKRS'),
         Domain(2, 2, 1, 1, '205.2.1', '21', '30', _test_label, '987.66', '-0.01', '11.0', '9.5',
            {'b': IonScore(None, None), 'y': IonScore('5.0', '3')},
            'HFS', ']', '0', '0.07', 'RQLEERLGLI')],
        [ResidueModification(2, 1, 1, 1, 1, 'C', '6', '57.021', '57.021@C', None, 2),
         ResidueModification(2, 1, 1, 2, 1, 'S', '13', '79.966', '79.966@S', None, 5)],
        SupportData(2, None, None, {}, 'scan=205 title',
            Trace('205.spectrum', '150.5 250.5', '7 3', {'m+h': '987.65', 'charge': '3'})),
        'scan=205 title'),
]

tandem_spectra_summary = [
    SpectrumIdentification(
        Spectrum(1, '101', '2'),
        [ProteinMatch(1, 1, '101.1', label=_test_label, expect='-5.0')],
        [PeptideSpan(1, 1, 1, '101.1')],
        [Domain(1, 1, 1, 1, '101.1.1', '10', expect='1.2e-03', seq='RQCSFMKSHFS')],
        tandem_spectra[0].modifications,
        None,
        'scan=101 title'),
    SpectrumIdentification(
        Spectrum(2, '205', '3'),
        [ProteinMatch(2, 1, '205.1', label=_decoy_label, expect='-1.3'),
         ProteinMatch(2, 2, '205.2', label=_test_label, expect='-2.0')],
        [PeptideSpan(2, 1, 1, '205.1'),
         PeptideSpan(2, 2, 1, '205.2')],
        [Domain(2, 1, 1, 1, '205.1.1', '5', expect='0.05', seq='PCTIDEKR'),
         Domain(2, 1, 1, 2, '205.1.2', '9', expect='0.9', seq='DEKRS'),
         Domain(2, 2, 1, 1, '205.2.1', '21', expect='0.07', seq='RQLEERLGLI')],
        tandem_spectra[1].modifications,
        None,
        'scan=205 title'),
]

tandem_support_map = {
    'HYPERLABEL_s1': '101.hyper',
    'HYPER_A0_s1': '4.1',
    'HYPER_A1_s1': '-0.2',
    'XVAL_HYPER_s1': '0 1 2',
    'YVAL_HYPER_s1': '5 3 1',
    'CONVOLLABEL_s1': '101.convolute',
    'XVAL_CONVOL_s1': '1 2',
    'YVAL_CONVOL_s1': '10 5',
    'B_IONLABEL_s1': '101.b',
    'XVAL_BIONS_s1': '0 1 2',
    'YVAL_BIONS_s1': '3 2 1',
    'Y_IONLABEL_s1': '101.y',
    'XVAL_YIONS_s1': '0 1',
    'YVAL_YIONS_s1': '4 1',
    'FRAGIONSPECDESC_s1': 'scan=101 title',
    'SPECTRUMLABEL_s1': '101.spectrum',
    'FRAGIONMZ_s1': '1234.56',
    'FRAGIONCHARGE_s1': '2',
    'XVAL_FRAGIONMZ_s1': '100.1 200.2\n300.3',
    'YVAL_FRAGIONMZ_s1': '10 20 30',
    'FRAGIONSPECDESC_s2': 'scan=205 title',
    'SPECTRUMLABEL_s2': '205.spectrum',
    'FRAGIONMZ_s2': '987.65',
    'FRAGIONCHARGE_s2': '3',
    'XVAL_FRAGIONMZ_s2': '150.5 250.5',
    'YVAL_FRAGIONMZ_s2': '7 3',
}

tandem_modification_map = {
    'at_s1_p1_d1_m1': '12',
    'modified_s1_p1_d1_m1': '57.02',
    'name_s1_p1_d1_m1': '57.02@C',
    'at_s1_p1_d1_m2': '15',
    'modified_s1_p1_d1_m2': '15.995',
    'name_s1_p1_d1_m2': '15.995@M',
    'at_s2_p1_d1_m1': '6',
    'modified_s2_p1_d1_m1': '57.021',
    'name_s2_p1_d1_m1': '57.021@C',
    'at_s2_p1_d2_m1': '13',
    'modified_s2_p1_d2_m1': '79.966',
    'name_s2_p1_d2_m1': '79.966@S',
}

scenario_document = b'''<?xml version="1.0"?>
<bioml>
<group id="101" z="2" type="model">
<protein label="sp|P12345|TEST" uid="7">
<peptide start="10" end="20">
<domain id="1" hyperscore="15.2">
<aa type="C" at="12" modified="57.02"/>
</domain>
</peptide>
</protein>
</group>
</bioml>
'''
