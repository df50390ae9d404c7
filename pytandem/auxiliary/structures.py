import re
from collections import OrderedDict


class PytandemError(Exception):
    """Exception raised for errors in pytandem.

    Attributes
    ----------
    message : str
        Error message.
    """

    def __init__(self, msg, *values):
        super(PytandemError, self).__init__(msg, *values)
        self.message = msg
        self.values = values

    def __str__(self):
        if not self.values:
            return "pytandem error, message: %s" % (repr(self.message),)
        else:
            return "pytandem error, message: %s %r" % (repr(self.message), self.values)


class MalformedXMLError(PytandemError):
    """Raised when the input is not well-formed XML.

    Attributes
    ----------
    line : int or None
        Line of the offending token, if known.
    column : int or None
        Column of the offending token, if known.
    """

    def __init__(self, msg, line=None, column=None):
        super(MalformedXMLError, self).__init__(msg, line, column)
        self.line = line
        self.column = column


class StructureError(PytandemError):
    """Raised when a recognized element lacks an attribute that the
    extraction cannot do without (e.g. a ``protein`` without ``label``).

    Attributes
    ----------
    element : str
        Local name of the offending element.
    attribute : str
        Name of the missing or invalid attribute.
    spectrum : int or None
        Ordinal of the enclosing spectrum group.
    line : int or None
        Source line of the element.
    """

    def __init__(self, msg, element=None, attribute=None, spectrum=None, line=None):
        super(StructureError, self).__init__(msg, element, attribute, spectrum, line)
        self.element = element
        self.attribute = attribute
        self.spectrum = spectrum
        self.line = line


class Parameters(dict):
    """A mapping from canonical parameter keys to string values.

    Numbered parameters (e.g. the second residue modification mass) are stored
    under the base key with the number appended: ``RESIDUEMODMASS_2``.
    """

    _numbered_pattern = r'^{}_(\d+)$'

    def numbered(self, key):
        """Collect the numbered variants of `key`.

        Parameters
        ----------
        key : str
            The canonical base key, e.g. ``'RESIDUEMODMASS'``.

        Returns
        -------
        out : OrderedDict
            Maps the index (as a string) to the value, sorted by index.
        """
        pattern = re.compile(self._numbered_pattern.format(re.escape(key)))
        found = []
        for k, v in self.items():
            match = pattern.match(k)
            if match:
                found.append((int(match.group(1)), match.group(1), v))
        return OrderedDict((n, v) for _, n, v in sorted(found))

    @property
    def fixed_modification(self):
        """The globally configured fixed modification (``residue, modification mass``)."""
        return self.get('RESIDUEMODMASS')

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, dict.__repr__(self))
