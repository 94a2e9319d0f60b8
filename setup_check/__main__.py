"""setup_check entrypoint"""
import argparse
import sys

from setup_check import config as config_utils
from setup_check.checker import SetupChecker


def main(argv=None):
    """Installed package report driver"""
    parser = argparse.ArgumentParser(
        description='Lists installed packages and optionally checks their files.'
    )
    parser.add_argument('packages', nargs='*', metavar='PACKAGE',
                        help='Only report the given packages (case-insensitive)')
    parser.add_argument('-v', '--verbose',
                        help=('Print missing or mismatched files and where packages '
                              'were last downloaded'),
                        action='store_true')
    parser.add_argument('-c', '--check-files',
                        help='Check that every file of each package is installed',
                        action='store_true')
    parser.add_argument('--root',
                        help=('The directory packages are installed to '
                              '(default: from configuration, otherwise /)'))
    parser.add_argument('--gzip',
                        help='gzip executable used to read package file lists')
    args = parser.parse_args(argv)

    try:
        settings = config_utils.load_config()
    except config_utils.ConfigError as exc:
        parser.exit(2, '{}: error: {}\n'.format(parser.prog, exc))

    if args.root is not None:
        settings['root'] = args.root
    if args.gzip is not None:
        settings['gzip'] = args.gzip

    checker = SetupChecker(settings['root'], verbose=args.verbose, gzip=settings['gzip'])
    checker.dump_setup(args.packages, check_files=args.check_files)
    sys.stdout.flush()

# include __main__ guard to prevent main() from being called twice from console
# script entrypoint
if __name__ == '__main__':
    main()
