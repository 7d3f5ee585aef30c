import io
import pathlib
import typing

from PIL import Image

from errors import ImageError
import logger


SUFFIXES = {'.gif', '.jpeg', '.jpg', '.png'}

# logged and skipped
UNSUPPORTED = {'.svg'}

# metadata kept across the rewrite
METADATA = ('icc_profile', 'exif')


def _save_options(image: Image.Image) -> typing.Dict[str, object]:
    fmt = image.format
    kept = {k: image.info[k] for k in METADATA if image.info.get(k)}

    if fmt == 'JPEG':
        return dict(kept, optimize=True, progressive=True, quality='keep')
    if fmt == 'PNG':
        return dict(kept, optimize=True)
    if fmt == 'GIF':
        return {'optimize': True,
                'interlace': True,
                'save_all': getattr(image, 'is_animated', False)}

    return {}


def optimize_image(path: pathlib.Path) -> typing.Tuple[int, int]:
    """ rewrite image in place when the optimized data is smaller


    Returns the sizes before and after.
    """

    before = path.stat().st_size

    with Image.open(path) as image:
        image.load()
        fmt = image.format

        buf = io.BytesIO()
        image.save(buf, fmt, **_save_options(image))

    data = buf.getvalue()
    if len(data) >= before:
        return before, before

    path.write_bytes(data)
    return before, len(data)


Failures = typing.List[typing.Tuple[pathlib.Path, str]]


def optimize_directory(directory: pathlib.Path, log: logger.Log) -> Failures:
    """ optimize images in directory, not recursive. returns failures """

    failures = []

    for path in sorted(directory.iterdir()):
        if not path.is_file():
            continue

        if path.suffix.lower() in UNSUPPORTED:
            log.wrn('Skipping {}, SVG optimization is not supported'.format(
                path,
            ))
            continue

        if path.suffix.lower() not in SUFFIXES:
            log.dbg('Skipping {}'.format(path))
            continue

        try:
            before, after = optimize_image(path)
        except OSError as e:
            log.err('{}: {}'.format(path, e))
            failures.append((path, str(e)))
            continue

        if after < before:
            log.inf('{} {} -> {} bytes'.format(path, before, after), indent=2)
        else:
            log.dbg('{} already optimal'.format(path), indent=2)

    return failures


def optimize_all(directories: typing.Iterable[str], log: logger.Log) -> None:
    failures = []

    for directory in directories:
        path = pathlib.Path(directory)
        if not path.is_dir():
            log.err('{} is not a valid directory'.format(path))
            failures.append((path, 'not a directory'))
            continue

        failures.extend(optimize_directory(path, log))

    log.don('imagemin')

    if failures:
        raise ImageError(failures)
