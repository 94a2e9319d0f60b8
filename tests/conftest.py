import gzip
import os

import pytest


class FakeInstallation:
    """Installation root under a temporary directory."""

    def __init__(self, root):
        self.root = root
        self.setup_dir = root / 'etc' / 'setup'
        self.setup_dir.mkdir(parents=True)
        self.file_lists = {}

    def add_file(self, relative_path, contents=''):
        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents)
        return path

    def add_dir(self, relative_path):
        path = self.root / relative_path
        path.mkdir(parents=True, exist_ok=True)
        return path

    def add_file_list(self, package, entries):
        """Writes a gzip'd file list for package and remembers its entries."""
        path = self.setup_dir / '{}.lst.gz'.format(package)
        with gzip.open(str(path), 'wt') as file_list:
            file_list.write(''.join(entry + '\n' for entry in entries))
        self.file_lists[str(path)] = list(entries)
        return path

    def add_raw_file_list(self, package, data, compress=True):
        """Writes data as package's file list, gzip'd unless compress is False."""
        path = self.setup_dir / '{}.lst.gz'.format(package)
        path.write_bytes(gzip.compress(data) if compress else data)
        return path

    def add_raw_file(self, relative_path):
        """Creates an empty file whose relative_path is given as bytes."""
        path = os.path.join(os.fsencode(str(self.root)), relative_path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'wb'):
            pass
        return path

    def write_db(self, lines):
        (self.setup_dir / 'installed.db').write_text(''.join(line + '\n' for line in lines))

    def decompress(self, path):
        """Stands in for gzip -dc, returning the lines given to add_file_list."""
        return iter(self.file_lists[path])


@pytest.fixture
def installation(tmp_path):
    return FakeInstallation(tmp_path)
