import argparse
import pathlib
import sys
import typing

import config
import context
from errors import ConfigError
import logger
import tasks


VERSION = '1.0.3'

DEFAULT_SEQUENCE = ('sass', 'watch', 'livereload', 'imagemin')

COMMANDS: typing.Dict[str, typing.Tuple[str, ...]] = {
    'default': DEFAULT_SEQUENCE,
    'watch': DEFAULT_SEQUENCE,
    'sass': ('sass',),
    'sasswatch': ('sass', 'watch'),
    'sassclean': ('sassclean',),
    'livereload': ('livereload',),
    'imagemin': ('imagemin',),
    'uglifyjs': ('uglifyjs',),
    'usage': ('usage',),
}


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sassdev',
        description='Automation for SASS development (also Bootstrap+Drupal).',
    )

    parser.add_argument('command',
                        metavar='COMMAND',
                        nargs='?',
                        default='default',
                        choices=sorted(COMMANDS),
                        help='Task to run. (default: everything)')

    flags = [
        ('-B', '--beep', 'Beep on completion of important task.'),
        ('-D', '--dev', 'Use development options for building.'),
        ('-V', '--verbose', 'Log detailed messages.'),
        ('-m', '--source-map', 'Create source map (*.map) files.'),
    ]
    for short, long, help_ in flags:
        parser.add_argument(short, long, action='store_true', help=help_)

    options = [
        ('-d', '--drupal-root', 'DIRECTORY', 'Drupal root directory.'),
        ('-t', '--theme', 'NAME', 'Drupal theme directory name.'),
        ('-y', '--style', 'STYLE',
         'Sass output style, compact|compressed|expanded|nested.'),
        ('-s', '--scss-dir', 'DIRECTORY', 'SCSS directory to process.'),
        ('-c', '--css-dir', 'DIRECTORY', 'CSS directory for SASS output.'),
        ('-e', '--scss-files', 'FILES',
         'SCSS files to preprocess, comma-delimited. (default: style.scss)'),
        ('-l', '--live-reload', 'PATTERNS',
         'Files to watch for livereload, comma-delimited.'),
        ('-i', '--imagemin', 'DIRECTORIES',
         'Image directories to minify, comma-delimited.'),
        ('-u', '--uglify-source', 'DIRECTORY',
         'Uglify JS source directory. (default: ./)'),
        ('-v', '--uglify-dest', 'DIRECTORY',
         'Uglify JS destination directory. (default: ./)'),
        ('-w', '--uglify-file', 'FILE',
         'Uglify JS destination file if to be merged.'),
    ]
    for short, long, metavar, help_ in options:
        parser.add_argument(short, long, metavar=metavar, default='',
                            help=help_)

    return parser


def parse_args(argv: typing.Sequence[str] = None,
               cwd: pathlib.Path = None) -> argparse.Namespace:
    """ parse command line on top of the defaults from the config file """

    parser = make_parser()

    defaults = config.Config.from_path(cwd or pathlib.Path.cwd())
    parser.set_defaults(**{
        k: v for k, v in defaults.items()
        if k != 'command' and parser.get_default(k) is not None
    })

    return parser.parse_args(argv)


def welcome(log: logger.Log) -> None:
    log.inf('sassdev v{}'.format(VERSION)) \
       .inf('Automation for SASS development (also Bootstrap+Drupal)') \
       .inf("Use 'sassdev usage' for help, Ctrl+C to terminate")


def main(argv: typing.Sequence[str] = None) -> int:
    cwd = pathlib.Path.cwd()

    try:
        args = parse_args(argv, cwd)
    except ConfigError as e:
        logger.Log().fatal(str(e))

    log = logger.Log(beep=args.beep, verbose=args.verbose)
    welcome(log)

    ctx = context.Context(args, log, cwd)
    tasks.run(COMMANDS[args.command], ctx)
    ctx.wait()

    return 0


if __name__ == '__main__':
    sys.exit(main())
