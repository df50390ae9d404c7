"""
xml - utilities for XML parsing
===============================

This module is not intended for end users. It implements the base class for
streaming XML readers, :py:class:`XML`, and the helpers used to access element
names, attributes and text in a case-insensitive way.

Dependencies
------------

This module requres :py:mod:`lxml`.

--------------------------------------------------------------------------------
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

from lxml import etree

from .auxiliary import FileReader, MalformedXMLError, StructureError
from .auxiliary import _keepstate_method as _keepstate


def _local_name(element):
    """Strip namespace from the XML element's name"""
    tag = element.tag
    if tag and tag[0] == '{':
        return tag.rpartition('}')[2]
    return tag


def _name(element):
    """Lower-case local name of `element`."""
    return _local_name(element).lower()


def get_attr(element, name, default=None):
    """Return the value of attribute `name` of `element`.

    Attribute names are matched case-insensitively; an exact match wins.
    Namespaced attributes are matched by their local name.
    """
    attrib = element.attrib
    if name in attrib:
        return attrib[name]
    lname = name.lower()
    for key, value in attrib.items():
        if key[0] == '{':
            key = key.rpartition('}')[2]
        if key.lower() == lname:
            return value
    return default


def require_attr(element, name, spectrum=None):
    """Like :py:func:`get_attr`, but raise :py:exc:`StructureError` if the
    attribute is missing."""
    value = get_attr(element, name)
    if value is None:
        ename = _local_name(element)
        raise StructureError(
            '<{}> element has no "{}" attribute'.format(ename, name),
            ename, name, spectrum, element.sourceline)
    return value


def get_text(element):
    """Return the stripped text of `element` or :py:const:`None` if empty."""
    if element.text:
        stext = element.text.strip()
        if stext:
            return stext
    return None


def iterchildren(element, *names):
    """Iterate over the children of `element` whose lower-case local name
    is in `names` (all element children if `names` is empty)."""
    for child in element.iterchildren():
        if not isinstance(child.tag, str):
            continue
        if not names or _name(child) in names:
            yield child


class XML(FileReader):
    """Base class for streaming XML readers. The instances can be used
    as context managers and as iterators.
    """
    # Configurable data
    file_format = 'XML'
    _root_element = None
    _huge_tree = False

    # Must be implemented by subclasses
    def _iterate(self, **kwargs):
        raise NotImplementedError

    def __init__(self, source, huge_tree=None, **kwargs):
        """Create an XML reader object.

        Parameters
        ----------
        source : str or file
            File name or file-like object corresponding to an XML file.
        huge_tree : bool, optional
            This option is passed to the `lxml` parser and defines whether
            security checks for XML tree depth and node size should be disabled.
            Default is :py:const:`False`.
            Enable this option for trusted files to avoid XMLSyntaxError exceptions
            (e.g. `XMLSyntaxError: xmlSAX2Characters: huge text node`).
        """
        if huge_tree is not None:
            self._huge_tree = huge_tree
        super(XML, self).__init__(source, mode='rb', parser_func=self._iterate, pass_file=False,
                args=(), kwargs=kwargs)

    @property
    def source_name(self):
        """The file name of the source, or a representation of the file object."""
        if isinstance(self._source_init, str):
            return self._source_init
        return getattr(self._source.file, 'name', repr(self._source.file))

    def iterparse(self, events=('start', 'end')):
        """Iterate over `(event, element)` pairs of the underlying file,
        starting at its current position.

        :py:class:`lxml.etree.XMLSyntaxError` is re-raised as
        :py:exc:`~pytandem.auxiliary.MalformedXMLError`.
        """
        try:
            for event, elem in etree.iterparse(self, events=events, remove_comments=True,
                    remove_pis=True, huge_tree=self._huge_tree):
                yield event, elem
        except etree.XMLSyntaxError as e:
            line, column = e.position
            raise MalformedXMLError('{} is not well-formed XML: {}'.format(self.source_name, e.msg),
                    line, column) from e

    @_keepstate
    def root_attributes(self):
        """Return the name and the attributes of the root element.

        Returns
        -------
        out : tuple
            A (local name, attribute dict) tuple.
        """
        for _, elem in self.iterparse(events=('start',)):
            return _local_name(elem), dict(elem.attrib)
