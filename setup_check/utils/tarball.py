"""Functions to split package tarball filenames into their components.

Tarball names do not follow a fixed grammar, so the package name and version
are found with positional rules: the version starts at the first dash that is
followed by a digit, and a source or patch archive is marked by a -src or
-patch segment right before the version or right before the extension.
"""

import collections
import enum
import string

TARBALL_SUFFIXES = ('.tar.gz', '.tar.bz2')
PATH_SEPARATORS = '/\\:'
DEFAULT_VERSION = '0.0'


class Variant(enum.Enum):
    """Kind of archive a tarball holds."""
    NONE = ''
    SRC = 'src'
    PATCH = 'patch'


class NotATarballError(ValueError):
    """Raised when a filename does not end in a recognized tarball suffix.

    Attributes:
        filename: The rejected filename.
    """

    def __init__(self, filename):
        super().__init__('{} is not a tarball'.format(filename))
        self.filename = filename


ParsedArchive = collections.namedtuple(
    'ParsedArchive', ['package', 'version', 'variant', 'suffix', 'tarball']
)
ParsedArchive.__doc__ = """Components of a tarball filename.

Attributes:
    package: Package base name, without directories or variant marker.
    version: Version string, '0.0' if the filename carries none.
    variant: A Variant.
    suffix: The tarball suffix exactly as it appeared ('.tar.gz' or '.tar.bz2').
    tarball: The input filename with any variant marker removed.
"""


def tarball_suffix(filename):
    """Returns the tarball suffix of filename.

    Raises:
        NotATarballError: filename ends in neither .tar.gz nor .tar.bz2.
    """
    for suffix in TARBALL_SUFFIXES:
        if filename.endswith(suffix):
            return suffix

    raise NotATarballError(filename)


def _basename_start(path):
    """Returns the index where the last path component of path begins.

    A separator at the very end of path does not start a new component.
    """
    start = 0
    for idx, char in enumerate(path[:-1]):
        if char in PATH_SEPARATORS:
            start = idx + 1
    return start


def _trailing_variant(text):
    """Returns the Variant whose -marker ends text, or None.

    -src is checked before -patch, and a marker making up all of text
    does not count.
    """
    lowered = text.lower()
    for variant in (Variant.SRC, Variant.PATCH):
        marker = '-' + variant.value
        if len(lowered) > len(marker) and lowered.endswith(marker):
            return variant
    return None


def _cut(text, spans):
    """Returns text with the (begin, end) index spans removed."""
    pieces = []
    pos = 0
    for begin, end in sorted(spans):
        pieces.append(text[pos:begin])
        pos = end
    pieces.append(text[pos:])
    return ''.join(pieces)


def parse_filename(filename):
    """Splits a tarball filename into package, version and variant.

    Examples:
        cygwin-1.7.9-1.tar.bz2 -> ('cygwin', '1.7.9-1', Variant.NONE)
        cygwin-1.7.9-1-src.tar.bz2 -> ('cygwin', '1.7.9-1', Variant.SRC)
        cygwin-src-1.7.9-1.tar.bz2 -> ('cygwin', '1.7.9-1', Variant.SRC)
        foo-patch.tar.gz -> ('foo', '0.0', Variant.PATCH)

    Returns:
        A ParsedArchive.

    Raises:
        NotATarballError: filename ends in neither .tar.gz nor .tar.bz2.
    """
    suffix = tarball_suffix(filename)
    stem = filename[:-len(suffix)]
    start = _basename_start(stem)
    name = stem[start:]

    package = name
    tail = ''
    variant = Variant.NONE
    # spans of filename holding variant markers, dropped from the canonical tarball
    cuts = []

    for idx, char in enumerate(name):
        if char != '-':
            continue

        if idx + 1 < len(name) and name[idx + 1] in string.digits:
            package = name[:idx]
            tail = name[idx + 1:]

            # marker right before the version (foo-src-1.0)
            found = _trailing_variant(package)
            if found is not None:
                marker_len = len(found.value) + 1
                package = package[:-marker_len]
                cuts.append((start + idx - marker_len, start + idx))
                variant = found
            break

        rest = name[idx + 1:].lower()
        if rest in (Variant.SRC.value, Variant.PATCH.value):
            # variant only, no version (foo-src)
            package = name[:idx]
            variant = Variant(rest)
            cuts.append((start + idx, len(stem)))
            break

    # marker right before the extension (foo-1.0-src)
    found = _trailing_variant(tail)
    if found is not None:
        marker_len = len(found.value) + 1
        tail = tail[:-marker_len]
        cuts.append((len(stem) - marker_len, len(stem)))
        variant = found

    return ParsedArchive(package=package,
                         version=tail or DEFAULT_VERSION,
                         variant=variant,
                         suffix=suffix,
                         tarball=_cut(filename, cuts))


def display_name(package, variant):
    """Returns package suffixed with -src/-patch if variant calls for it."""
    if variant is Variant.NONE:
        return package
    return '{}-{}'.format(package, variant.value)
