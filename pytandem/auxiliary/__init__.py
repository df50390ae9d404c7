from .structures import (
    PytandemError, MalformedXMLError, StructureError, Parameters)

from .file_helpers import (
    _file_obj, _keepstate_method, IteratorContextManager,
    FileReader, _make_chain)

from .utils import parse_values
