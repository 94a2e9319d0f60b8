"""Translation of paths inside the installation root to host paths"""

import os


def host_path(root, relative_path, suffix=''):
    """Returns the host path of relative_path under root, with suffix appended.

    Leading separators of relative_path are ignored, so '/etc/setup' and
    'etc/setup' both end up inside root.
    """
    return os.path.join(root, relative_path.lstrip('/')) + suffix


def printable(text):
    """Returns text with surrogate-escaped bytes replaced, safe to print.

    Names decoded with os.fsdecode keep undecodable bytes as lone
    surrogates, which a strict stdout encoder rejects.
    """
    return text.encode('utf-8', 'surrogateescape').decode('utf-8', 'replace')
