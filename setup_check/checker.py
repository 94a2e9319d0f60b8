"""Installed package report

Classes:
    SetupChecker: lists installed packages and verifies their files
"""

import functools
import os

from setup_check.utils import cmd as cmd_utils
from setup_check.utils import database as db_utils
from setup_check.utils import paths as path_utils
from setup_check.utils import table as table_utils
from setup_check.verifier import FileListVerifier


def _print(text, **kwargs):
    """Prints text with undecodable bytes replaced."""
    print(path_utils.printable(text), **kwargs)


class SetupChecker:
    """Lists installed packages and verifies their files.

    Instance attributes:
        root: Path of the installation root on the host.
        verbose: A boolean indicating whether diagnostics and download
            locations are printed.
        verifier: FileListVerifier used when files are checked.

    Class attributes:
        SETUP_DIR: Directory of the package database and file lists, relative to root.
        INSTALLED_DB: File name of the installed package database.
        LAST_CACHE: File naming the directory packages were last downloaded to.
        LAST_MIRROR: File naming the mirror packages were last downloaded from.
        TITLE: First line of the report.
        NO_DATA_MESSAGE: Printed instead of the report when the database is unavailable.
        STATUS_OK: Status of a package whose files were all found.
        STATUS_INCOMPLETE: Status of a package with missing or mismatched files.
    """

    SETUP_DIR = 'etc/setup'
    INSTALLED_DB = 'installed.db'
    LAST_CACHE = 'last-cache'
    LAST_MIRROR = 'last-mirror'

    TITLE = 'Cygwin Package Information'
    NO_DATA_MESSAGE = 'No setup information found'
    STATUS_OK = 'OK'
    STATUS_INCOMPLETE = 'Incomplete'

    def __init__(self, root='/', verbose=False, gzip=cmd_utils.DEFAULT_GZIP, decompress=None):
        """Inits SetupChecker for the installation at root.

        Args:
            root: Path of the installation root on the host.
            verbose: If true, print diagnostics and download locations.
            gzip: gzip executable used to read file lists.
            decompress: Callable returning the lines of a compressed file list.
                Overrides gzip if given.
        """
        self.root = root
        self.verbose = verbose

        if decompress is None:
            decompress = functools.partial(cmd_utils.gzip_lines, gzip=gzip)
        self.verifier = FileListVerifier(root, self.SETUP_DIR, decompress)

    def setup_path(self, name):
        """Returns the host path of a file in the setup directory."""
        return path_utils.host_path(self.root, self.SETUP_DIR, '/' + name)

    @property
    def db_path(self):
        """Host path of the installed package database."""
        return self.setup_path(self.INSTALLED_DB)

    def read_records(self, filters=None):
        """Returns PackageRecords of the installed packages, sorted by name.

        Raises:
            DatabaseUnavailableError: The database could not be opened or has no lines.
        """
        records = db_utils.read_package_records(self.db_path, filters)
        return table_utils.sort_records(records)

    def read_first_line(self, name):
        """Returns the first line of a file in the setup directory, or None.

        None is also returned if the file is empty or cannot be read.
        """
        try:
            with open(self.setup_path(name), 'rb') as setup_file:
                line = setup_file.readline()
        except OSError:
            return None

        return os.fsdecode(line.rstrip(b'\r\n')) or None

    def print_download_info(self):
        """Prints where packages were last downloaded to and from, if known."""
        printed = False
        for message, name in (('Last downloaded files to: ', self.LAST_CACHE),
                              ('Last downloaded files from: ', self.LAST_MIRROR)):
            line = self.read_first_line(name)
            if line is not None:
                _print('{}{}'.format(message, line))
                printed = True

        if printed:
            print()

    def check_package(self, package):
        """Verifies package's files, printing diagnostics in verbose mode.

        Returns:
            True if every listed file was found, False otherwise.
        """
        outcome = self.verifier.verify(package)
        if self.verbose:
            for message in outcome.diagnostics:
                _print(message)
        return outcome.complete

    def dump_setup(self, filters=None, check_files=False):
        """Prints the installed package report.

        Args:
            filters: Package names to report. If empty or None, report all packages.
            check_files: If true, verify each package's files and add a status column.

        Returns:
            False if the database was unavailable, True otherwise.
        """
        try:
            records = self.read_records(filters)
        except db_utils.DatabaseUnavailableError:
            _print(self.NO_DATA_MESSAGE)
            return False

        _print(self.TITLE)
        if self.verbose:
            self.print_download_info()

        widths = table_utils.column_widths(records)
        if not check_files:
            for line in table_utils.format_table(records, widths):
                _print(line)
            return True

        _print(table_utils.format_header(widths, check_files=True))
        for record in records:
            complete = self.check_package(record.package)
            status = self.STATUS_OK if complete else self.STATUS_INCOMPLETE
            _print(table_utils.format_row(widths, record.name, record.version, status),
                  flush=True)

        return True
