import enum
import os
import pathlib
import stat
import typing

from errors import ConfigError
import logger


class PathKind(enum.Enum):
    DIRECTORY = 'directory'
    FILE = 'file'


def join(base: typing.Union[str, pathlib.Path], *parts: str) -> pathlib.Path:
    """
    >>> join('/proj/scss', '..', 'css').as_posix()
    '/proj/css'
    """

    return pathlib.Path(os.path.normpath(os.path.join(str(base), *parts)))


def is_valid_path(path: typing.Union[str, pathlib.Path],
                  kind: PathKind = PathKind.DIRECTORY) -> bool:
    """ check that path is an existing directory or regular file


    Any error from the file system means that the path is not valid.
    >>> is_valid_path('/no/such/directory')
    False
    """

    try:
        mode = os.stat(str(path)).st_mode
    except OSError:
        return False

    if kind is PathKind.DIRECTORY:
        return stat.S_ISDIR(mode)
    return stat.S_ISREG(mode)


def check_path(path: typing.Union[str, pathlib.Path],
               kind: PathKind,
               label: str) -> pathlib.Path:

    try:
        mode = os.stat(str(path)).st_mode
    except PermissionError:
        raise ConfigError("{} '{}' is not accessible".format(label, path))
    except OSError:
        raise ConfigError("{} '{}' is not valid".format(label, path))

    valid = stat.S_ISDIR(mode) if kind is PathKind.DIRECTORY \
        else stat.S_ISREG(mode)
    if not valid:
        raise ConfigError("{} '{}' is not a valid {}".format(
            label, path, kind.value,
        ))

    if (kind is PathKind.DIRECTORY
            and not os.access(str(path), os.R_OK | os.X_OK)):
        raise ConfigError("{} '{}' is not accessible".format(label, path))

    return pathlib.Path(path)


def first_valid(candidates: typing.Iterable[pathlib.Path],
                log: logger.Log,
                label: str = '') -> typing.Optional[pathlib.Path]:

    for candidate in candidates:
        if label:
            log.inf('Checking {} {}'.format(label, candidate))
        if is_valid_path(candidate, PathKind.DIRECTORY):
            return candidate

    return None


def theme_candidates(root: pathlib.Path,
                     theme: str) -> typing.List[pathlib.Path]:
    """
    >>> candidates = theme_candidates(pathlib.Path('/site'), 'foo')
    >>> [p.as_posix() for p in candidates]  # doctest: +NORMALIZE_WHITESPACE
    ['/site/themes/foo', '/site/themes/custom/foo',
     '/site/public_html/themes/foo', '/site/public_html/themes/custom/foo',
     '/site/web/themes/foo', '/site/web/themes/custom/foo']
    """

    result = []
    for public in ((), ('public_html',), ('web',)):
        result.append(join(root, *public, 'themes', theme))
        result.append(join(root, *public, 'themes', 'custom', theme))
    return result


class ResolvedPaths(typing.NamedTuple):
    scss_dir: pathlib.Path
    css_dir: pathlib.Path
    template_dir: typing.Optional[pathlib.Path] = None
    theme_image_dir: typing.Optional[pathlib.Path] = None
    assets_dir: typing.Optional[pathlib.Path] = None
    theme_dir: typing.Optional[pathlib.Path] = None


def _resolve_pair(scss_dir: str,
                  css_dir: str,
                  log: logger.Log) -> typing.Tuple[pathlib.Path,
                                                   pathlib.Path,
                                                   pathlib.Path]:

    scss = css = reference = None

    if scss_dir:
        reference = scss = check_path(scss_dir, PathKind.DIRECTORY,
                                      'SCSS directory')

    if css_dir:
        reference = css = check_path(css_dir, PathKind.DIRECTORY,
                                     'CSS directory')

    if css is None:
        log.inf('CSS directory not known, trying to locate...')
        css = first_valid([join(scss, '..', 'css'), join(scss, 'css')],
                          log, 'CSS directory')
        if css is None:
            raise ConfigError('Provide valid CSS directory')

    if scss is None:
        log.inf('SCSS directory not known, trying to locate...')
        scss = first_valid([join(css, '..', 'scss'), join(css, 'scss')],
                           log, 'SCSS directory')
        if scss is None:
            raise ConfigError('Provide valid SCSS directory')

    return scss, css, reference


def _resolve_theme(drupal_root: str,
                   theme: str,
                   cwd: pathlib.Path,
                   log: logger.Log) -> pathlib.Path:

    if drupal_root:
        root = check_path(drupal_root, PathKind.DIRECTORY,
                          'Drupal root directory')
    else:
        root = join(cwd, '..')

    if not theme.strip():
        raise ConfigError('Drupal is indicated, but no theme name was supplied')

    theme_dir = first_valid(theme_candidates(root, theme.strip()),
                            log, 'theme directory')
    if theme_dir is None:
        raise ConfigError('Could not find valid Drupal theme directory {!r} '
                          'under {}'.format(theme.strip(), root))

    return theme_dir


def resolve_paths(log: logger.Log,
                  scss_dir: str = '',
                  css_dir: str = '',
                  drupal_root: str = '',
                  theme: str = '',
                  cwd: pathlib.Path = None) -> ResolvedPaths:

    cwd = cwd if cwd is not None else pathlib.Path.cwd()
    theme_dir = None

    if scss_dir or css_dir:
        scss, css, reference = _resolve_pair(scss_dir, css_dir, log)
    elif drupal_root or theme:
        theme_dir = _resolve_theme(drupal_root, theme, cwd, log)
        reference = scss = theme_dir / 'scss'
        css = theme_dir / 'css'
    else:
        raise ConfigError('Insufficient arguments, cannot proceed. '
                          'Use --drupal-root, --theme or --scss-dir, --css-dir')

    template_dir = first_valid([join(reference, '..', 'templates')], log)
    if template_dir is not None:
        log.inf('Template directory detected {}'.format(template_dir))

    theme_image_dir = first_valid([join(reference, '..', 'images')], log)
    if theme_image_dir is not None:
        log.inf('Theme images directory detected {}'.format(theme_image_dir))

    assets_dir = first_valid([
        join(reference, '..', '..', '..', 'sites', 'default', 'files'),
        join(reference, '..', '..', '..', '..', 'sites', 'default', 'files'),
    ], log)
    if assets_dir is not None:
        log.inf('Assets directory detected {}'.format(assets_dir))

    return ResolvedPaths(scss_dir=scss,
                         css_dir=css,
                         template_dir=template_dir,
                         theme_image_dir=theme_image_dir,
                         assets_dir=assets_dir,
                         theme_dir=theme_dir)
