"""Checks that the files listed in a package's file list exist on disk

Classes:
    EntryKind: kind of a file list entry
    AccessError: classification of a failed stat call
    FileListVerifier: verifies installed packages against their file lists
"""

import collections
import enum
import errno
import os
import stat
import subprocess

from setup_check.utils import cmd as cmd_utils
from setup_check.utils import paths as path_utils

POSTINSTALL_PREFIX = 'etc/postinstall/'
POSTINSTALL_DONE_SUFFIX = '.done'
SYMLINK_SUFFIX = '.lnk'
FILE_LIST_SUFFIX = '.lst.gz'


class EntryKind(enum.Enum):
    """Kind of an entry in a package's file list."""
    DIRECTORY = 'directory'
    POSTINSTALL = 'postinstall'
    FILE = 'file'


class AccessError(enum.Enum):
    """Why an entry could not be found on disk."""
    NOT_FOUND = 'not found'
    PERMISSION_DENIED = 'permission denied'
    OTHER = 'other'


VerificationOutcome = collections.namedtuple('VerificationOutcome',
                                             ['package', 'complete', 'diagnostics'])
VerificationOutcome.__doc__ = """Result of verifying one package.

Attributes:
    package: The package name.
    complete: True if every listed file was found with the right type.
    diagnostics: A list of messages describing each problem found.
"""


def classify_entry(entry):
    """Returns the EntryKind of a file list entry."""
    if entry.endswith('/'):
        return EntryKind.DIRECTORY
    if entry.startswith(POSTINSTALL_PREFIX):
        return EntryKind.POSTINSTALL
    return EntryKind.FILE


def classify_access_error(exc):
    """Returns the AccessError matching an OSError raised by os.stat."""
    if exc.errno == errno.ENOENT:
        return AccessError.NOT_FOUND
    if exc.errno in (errno.EACCES, errno.EPERM):
        return AccessError.PERMISSION_DENIED
    return AccessError.OTHER


class FileListVerifier:
    """Verifies installed packages against their file lists.

    Instance attributes:
        root: Path of the installation root on the host.
        setup_dir: Directory holding the file lists, relative to root.
        decompress: Callable taking the host path of a compressed file list and
            returning an iterable of its lines. Defaults to reading gzip -dc output.
    """

    def __init__(self, root, setup_dir='etc/setup', decompress=None):
        self.root = root
        self.setup_dir = setup_dir.strip('/')
        self.decompress = decompress if decompress is not None else cmd_utils.gzip_lines

    def file_list_path(self, package):
        """Returns the path of package's file list, relative to root."""
        return '{}/{}{}'.format(self.setup_dir, package, FILE_LIST_SUFFIX)

    def _stat(self, entry, suffixes=('',)):
        """Stats entry under root, trying each suffix in turn.

        Returns:
            The stat result of the first suffix that exists.

        Raises:
            OSError: None of the suffixed paths could be stat'd. The error
                of the last attempt is raised.
        """
        error = None
        for suffix in suffixes:
            try:
                return os.stat(path_utils.host_path(self.root, entry, suffix))
            except OSError as exc:
                error = exc
        raise error

    @staticmethod
    def _access_problem(exc, entry, package, what):
        """Returns a tuple of (failed, message) for a failed stat of entry."""
        kind = classify_access_error(exc)
        if kind is AccessError.NOT_FOUND:
            return True, 'Missing {}: /{} from package {}'.format(what, entry, package)
        if kind is AccessError.PERMISSION_DENIED:
            return True, 'Unable to access {} /{} from package {}'.format(what, entry, package)

        # neither missing nor forbidden, so the entry is not counted as a failure
        return False, 'Unable to check {} /{} from package {}: {}'.format(
            what, entry, package, exc.strerror or exc)

    def check_directory(self, entry, package):
        """Checks that a directory entry exists and is a directory.

        Returns:
            A tuple of (ok, message), message being None if there is nothing to report.
        """
        try:
            status = self._stat(entry.rstrip('/'))
        except OSError as exc:
            failed, message = self._access_problem(exc, entry, package, 'directory')
            return not failed, message

        if not stat.S_ISDIR(status.st_mode):
            return False, 'Directory/file mismatch: /{} from package {}'.format(entry, package)
        return True, None

    def check_file(self, entry, package, alternate_suffix=None):
        """Checks that a file entry, or the entry with alternate_suffix, is a regular file.

        Returns:
            A tuple of (ok, message), message being None if there is nothing to report.
        """
        suffixes = ('',) if alternate_suffix is None else ('', alternate_suffix)
        try:
            status = self._stat(entry, suffixes)
        except OSError as exc:
            failed, message = self._access_problem(exc, entry, package, 'file')
            return not failed, message

        if not stat.S_ISREG(status.st_mode):
            return False, 'File type mismatch: /{} from package {}'.format(entry, package)
        return True, None

    def check_entry(self, entry, package):
        """Checks one file list entry according to its EntryKind.

        Returns:
            A tuple of (ok, message), message being None if there is nothing to report.
        """
        kind = classify_entry(entry)
        if kind is EntryKind.DIRECTORY:
            return self.check_directory(entry, package)
        if kind is EntryKind.POSTINSTALL:
            # postinstall scripts are renamed to .done once they have run
            return self.check_file(entry, package, POSTINSTALL_DONE_SUFFIX)
        return self.check_file(entry, package, SYMLINK_SUFFIX)

    def verify(self, package):
        """Verifies every file in package's file list.

        One bad entry does not stop the others from being checked.

        Returns:
            A VerificationOutcome.
        """
        file_list = self.file_list_path(package)
        file_list_host_path = path_utils.host_path(self.root, file_list)

        if not os.path.isfile(file_list_host_path):
            return VerificationOutcome(
                package, False,
                ['Missing file list /{} for package {}'.format(file_list, package)]
            )

        complete = True
        diagnostics = []

        lines = ()
        try:
            lines = self.decompress(file_list_host_path)
            for line in lines:
                entry = line.rstrip('\r\n')
                if not entry:
                    continue

                ok, message = self.check_entry(entry, package)
                if not ok:
                    complete = False
                if message is not None:
                    diagnostics.append(message)
        except (OSError, subprocess.CalledProcessError) as exc:
            complete = False
            diagnostics.append('Unable to read file list /{} for package {}: {}'.format(
                file_list, package, getattr(exc, 'strerror', None) or exc))
        finally:
            close = getattr(lines, 'close', None)
            if close is not None:
                close()

        return VerificationOutcome(package, complete, diagnostics)
