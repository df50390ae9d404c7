from os import path
import pytandem
pytandem.__path__ = [path.abspath(path.join(path.dirname(__file__), path.pardir, 'pytandem'))]
import unittest
from io import BytesIO
import numpy as np
from lxml import etree
from pytandem import auxiliary as aux
from pytandem import xml

class ErrorTest(unittest.TestCase):
    def test_hierarchy(self):
        self.assertTrue(issubclass(aux.MalformedXMLError, aux.PytandemError))
        self.assertTrue(issubclass(aux.StructureError, aux.PytandemError))

    def test_str(self):
        self.assertEqual(str(aux.PytandemError('oops')), "pytandem error, message: 'oops'")
        err = aux.StructureError('missing', 'protein', 'label', 3, 10)
        self.assertEqual((err.element, err.attribute, err.spectrum, err.line), ('protein', 'label', 3, 10))
        self.assertIn("'missing'", str(err))

class ParseValuesTest(unittest.TestCase):
    def test_floats(self):
        self.assertTrue(np.allclose(aux.parse_values('1.5 2.5\n3.5'), [1.5, 2.5, 3.5]))

    def test_ints(self):
        arr = aux.parse_values('1 2 3', int)
        self.assertEqual(arr.tolist(), [1, 2, 3])

    def test_empty(self):
        self.assertEqual(aux.parse_values(None).size, 0)
        self.assertEqual(aux.parse_values('').size, 0)

class XMLHelpersTest(unittest.TestCase):
    def setUp(self):
        self.element = etree.fromstring(
            '<root xmlns:g="http://example.com/g" Label="x" g:Type="t"> text <a/><B/><!-- c --><a/></root>')

    def test_get_attr(self):
        self.assertEqual(xml.get_attr(self.element, 'label'), 'x')
        self.assertEqual(xml.get_attr(self.element, 'type'), 't')
        self.assertIsNone(xml.get_attr(self.element, 'uid'))
        self.assertEqual(xml.get_attr(self.element, 'uid', '0'), '0')

    def test_require_attr(self):
        self.assertEqual(xml.require_attr(self.element, 'LABEL'), 'x')
        with self.assertRaises(aux.StructureError) as cm:
            xml.require_attr(self.element, 'uid', 2)
        self.assertEqual(cm.exception.element, 'root')
        self.assertEqual(cm.exception.spectrum, 2)
        self.assertEqual(cm.exception.line, 1)

    def test_get_text(self):
        self.assertEqual(xml.get_text(self.element), 'text')
        self.assertIsNone(xml.get_text(self.element[0]))

    def test_iterchildren(self):
        self.assertEqual(len(list(xml.iterchildren(self.element))), 3)
        self.assertEqual(len(list(xml.iterchildren(self.element, 'a'))), 2)
        self.assertEqual(len(list(xml.iterchildren(self.element, 'b'))), 1)

class FileHelpersTest(unittest.TestCase):
    def test_keepstate(self):
        class Reader(xml.XML):
            def _iterate(self):
                for _, elem in self.iterparse(events=('end',)):
                    yield xml._local_name(elem)

        source = BytesIO(b'<bioml a="1"><x/></bioml>')
        with Reader(source) as r:
            self.assertEqual(r.root_attributes(), ('bioml', {'a': '1'}))
            self.assertEqual(r.tell(), 0)
            self.assertEqual(list(r), ['x', 'bioml'])

    def test_chain(self):
        def reader(source):
            return aux.IteratorContextManager(source, parser_func=iter)

        chain = aux._make_chain(reader, 'reader')
        with chain([1, 2], [3]) as c:
            self.assertEqual(list(c), [1, 2, 3])
        with chain.from_iterable([[1], [2, 3]]) as c:
            self.assertEqual(list(c), [1, 2, 3])


if __name__ == '__main__':
    unittest.main()
