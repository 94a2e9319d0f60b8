"""Functions to read the output of shell commands."""

import os
import subprocess

DEFAULT_GZIP = 'gzip'


def iter_output_lines(args):
    """Generator of the lines a command writes to stdout, without newlines.

    The process is started on the first iteration and read as it runs; its
    stdout is never buffered whole. Lines are decoded with os.fsdecode, so
    bytes that are not valid in the filesystem encoding survive as surrogate
    escapes and still name the same file on disk. Closing the generator early
    terminates the process. stderr is discarded.

    Raises:
        OSError: The command could not be started.
        subprocess.CalledProcessError: The command exited with a nonzero status
            after its output was read to the end.
    """
    proc = subprocess.Popen(args, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL)
    drained = False
    try:
        for line in proc.stdout:
            yield os.fsdecode(line.rstrip(b'\n'))
        drained = True
    finally:
        proc.stdout.close()
        if not drained and proc.poll() is None:
            proc.terminate()
        returncode = proc.wait()

    if returncode != 0:
        raise subprocess.CalledProcessError(returncode, args)


def gzip_lines(path, gzip=DEFAULT_GZIP):
    """Generator of the decompressed lines of the gzip file at path.

    Equivalent to reading the output of gzip -dc path. A corrupt or truncated
    file raises subprocess.CalledProcessError once the output is exhausted.
    """
    return iter_output_lines([gzip, '-dc', path])
