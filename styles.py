import os.path
import pathlib
import shutil
import subprocess
import typing

import sass

from config import RunConfig
from errors import CompileError
import logger
import utils


BROWSERS = ', '.join([
    'last 2 versions',
    'safari 5',
    'ie 7',
    'ie 8',
    'ie 9',
    'opera 12.1',
    'ios 6',
    'android 4',
])

# seconds, including a first-run fetch of postcss-cli
PREFIX_TIMEOUT = 120


def clean(run: RunConfig, log: logger.Log) -> typing.List[pathlib.Path]:
    pattern = os.path.join(str(run.css_dir), '*.map')
    log.inf('Removing maps {}'.format(pattern))

    removed = utils.remove_files(pattern, log)

    log.don('sass-clean')
    return removed


def css_path(run: RunConfig, source: pathlib.Path) -> pathlib.Path:
    return run.css_dir / (source.stem + '.css')


def compile_file(run: RunConfig, source: pathlib.Path) -> pathlib.Path:
    """ compile one SCSS file into the CSS directory, with its map if needed """

    out_path = css_path(run, source)
    map_path = out_path.with_name(out_path.name + '.map')

    try:
        if run.source_map:
            css, source_map = sass.compile(
                filename=str(source),
                output_style=run.style,
                source_map_filename=str(map_path),
                output_filename_hint=str(out_path),
                source_map_contents=True,
            )
        else:
            css = sass.compile(filename=str(source), output_style=run.style)
            source_map = None
    except sass.CompileError as e:
        raise CompileError('sass', source, str(e)) from e

    run.css_dir.mkdir(parents=True, exist_ok=True)
    out_path.write_text(css, encoding='utf-8')
    if source_map is not None:
        map_path.write_text(source_map, encoding='utf-8')

    return out_path


class Prefixer:
    """ vendor prefixes via PostCSS autoprefixer, run through npx """

    def __init__(self, log: logger.Log) -> None:
        self.log = log
        self._warned = False

    def available(self) -> bool:
        if shutil.which('npx') is not None:
            return True

        if not self._warned:
            self.log.wrn('npx not found, vendor prefixes will not be added')
            self._warned = True

        return False

    def __call__(self, path: pathlib.Path, source_map: bool) -> None:
        if not self.available():
            return

        cmd = [
            'npx', '--yes', '-p', 'postcss-cli', '-p', 'autoprefixer',
            'postcss', str(path),
            '--replace',
            '--use', 'autoprefixer',
            '--map' if source_map else '--no-map',
        ]

        try:
            utils.run_logged(cmd,
                             self.log,
                             env={'BROWSERSLIST': BROWSERS},
                             timeout=PREFIX_TIMEOUT)
        except subprocess.CalledProcessError as e:
            raise CompileError('autoprefixer',
                               path,
                               (e.stderr or '').strip() or str(e)) from e
        except subprocess.TimeoutExpired as e:
            raise CompileError('autoprefixer',
                               path,
                               'timed out after {} seconds'.format(e.timeout)
                               ) from e


def preprocess(run: RunConfig,
               log: logger.Log,
               prefix: typing.Callable[[pathlib.Path, bool], None] = None
               ) -> typing.List[pathlib.Path]:

    written = []

    for source in run.scss_paths:
        out_path = compile_file(run, source)
        if prefix is not None:
            prefix(out_path, run.source_map)

        log.inf('{} -> {}'.format(source, out_path))
        written.append(out_path)

    log.don('sass-preprocess')
    return written
