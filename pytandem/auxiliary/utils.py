import numpy as np


def parse_values(values, dtype=float):
    """Convert a whitespace-delimited string of numbers, as found in
    ``GAML:values`` elements, into a :py:class:`numpy.ndarray`.

    Parameters
    ----------
    values : str or None
        The opaque sample string. :py:const:`None` yields an empty array.
    dtype : dtype, optional
        The type of the array elements. Default is :py:class:`float`.

    Returns
    -------
    out : numpy.ndarray
    """
    if not values:
        return np.array([], dtype=dtype)
    return np.fromstring(values.replace('\n', ' '), dtype=dtype, sep=' ')
