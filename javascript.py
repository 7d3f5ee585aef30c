import os.path
import pathlib
import typing

import rjsmin

import logger
import utils


def bundle_name(name: str) -> str:
    """
    >>> bundle_name('app')
    'app.min.js'
    >>> bundle_name('app.js')
    'app.js'
    >>> bundle_name('')
    ''
    """

    if not name or name.endswith('.js'):
        return name
    return name + '.min.js'


def sources(source_dir: pathlib.Path) -> typing.List[pathlib.Path]:
    return [
        p for p in sorted(source_dir.glob('*.js'))
        if p.is_file() and not p.name.endswith('.min.js')
    ]


def minify(source_dir: pathlib.Path,
           dest_dir: pathlib.Path,
           bundle: str,
           log: logger.Log) -> typing.List[pathlib.Path]:

    utils.remove_files(os.path.join(str(dest_dir), '*.map'), log)

    dest_dir.mkdir(parents=True, exist_ok=True)
    files = sources(source_dir)
    if not files:
        log.wrn('No JavaScript files found in {}'.format(source_dir))
        return []

    written = []

    if bundle:
        joined = '\n'.join(p.read_text(encoding='utf-8') for p in files)
        out_path = dest_dir / bundle
        out_path.write_text(rjsmin.jsmin(joined), encoding='utf-8')
        log.inf('{} file(s) -> {}'.format(len(files), out_path))
        written.append(out_path)
    else:
        for path in files:
            out_path = dest_dir / (path.stem + '.min.js')
            out_path.write_text(rjsmin.jsmin(path.read_text(encoding='utf-8')),
                                encoding='utf-8')
            log.inf('{} -> {}'.format(path, out_path))
            written.append(out_path)

    log.don('uglifyjs')
    return written
