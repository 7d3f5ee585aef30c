import dataclasses
import os.path
import pathlib
import typing

import yaml

from errors import ConfigError
import fileset
import logger
import paths


CONFIG_FILE = '.sassdev.yml'

DEFAULT_SCSS_FILE = 'style.scss'

STYLES = ('compact', 'compressed', 'expanded', 'nested')


class Config(typing.Mapping):
    """ option defaults read from a YAML file


    Keys may be written with dashes, like the command line flags.
    >>> conf = Config('scss-dir: web/scss\\nimagemin: [images, files]\\n')
    >>> conf['scss_dir']
    'web/scss'
    >>> conf['imagemin']
    'images,files'
    >>> conf['theme'] is None
    True
    """

    def __init__(self, data: typing.Union[str, dict]) -> None:
        loaded = data if isinstance(data, dict) else yaml.safe_load(data)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError('{} must contain a mapping of options'.format(
                CONFIG_FILE,
            ))

        self._config = {
            str(k).replace('-', '_'): self._flatten(v)
            for k, v in loaded.items()
        }

    @staticmethod
    def _flatten(value: object) -> object:
        if value is None:
            return ''
        if isinstance(value, (list, tuple)):
            return ','.join(str(x) for x in value)
        return value

    @classmethod
    def from_path(cls, path: pathlib.Path) -> 'Config':

        try:
            with (path / CONFIG_FILE).open() as f:
                return cls(f.read())
        except FileNotFoundError:
            return cls('')
        except yaml.YAMLError as e:
            raise ConfigError('{} is broken: {}'.format(path / CONFIG_FILE, e))

    def __str__(self) -> str:
        return '<Config {}>'.format(self._config)

    def __getitem__(self, key: str) -> object:
        return self._config.get(key)

    def __iter__(self) -> typing.Iterator:
        return iter(self._config)

    def __len__(self) -> int:
        return len(self._config)


@dataclasses.dataclass(frozen=True)
class RunConfig:
    scss_dir: pathlib.Path
    css_dir: pathlib.Path
    scss_files: typing.Tuple[str, ...]
    style: str
    source_map: bool
    dev: bool
    template_dir: typing.Optional[pathlib.Path] = None
    theme_image_dir: typing.Optional[pathlib.Path] = None
    assets_dir: typing.Optional[pathlib.Path] = None

    @property
    def scss_paths(self) -> typing.List[pathlib.Path]:
        return [self.scss_dir / name for name in self.scss_files]

    @property
    def css_pattern(self) -> str:
        return os.path.join(str(self.css_dir), '*.css')

    @property
    def template_pattern(self) -> typing.Optional[str]:
        if self.template_dir is None:
            return None
        return os.path.join(str(self.template_dir), '**', '*.twig')

    @property
    def watch_pattern(self) -> str:
        return os.path.join(str(self.scss_dir), '**', '*.scss')


def normalize_style(style: typing.Optional[str], dev: bool) -> str:
    """
    >>> normalize_style('', dev=True)
    'expanded'
    >>> normalize_style(None, dev=False)
    'compressed'
    >>> normalize_style('Nested', dev=False)
    'nested'
    """

    if not style:
        return 'expanded' if dev else 'compressed'

    normalized = style.strip().lower()
    if normalized not in STYLES:
        raise ConfigError("SASS style '{}' is invalid, use one of {}".format(
            style, '|'.join(STYLES),
        ))

    return normalized


def build_run_config(resolved: paths.ResolvedPaths,
                     log: logger.Log,
                     scss_files: typing.Optional[str] = '',
                     style: typing.Optional[str] = '',
                     source_map: bool = False,
                     dev: bool = False) -> RunConfig:

    names = list(fileset.ItemSet(scss_files or DEFAULT_SCSS_FILE))
    for name in names:
        path = resolved.scss_dir / name
        if not paths.is_valid_path(path, paths.PathKind.FILE):
            raise ConfigError("SCSS file '{}' is invalid".format(path))

    run = RunConfig(scss_dir=resolved.scss_dir,
                    css_dir=resolved.css_dir,
                    scss_files=tuple(names),
                    style=normalize_style(style, dev),
                    source_map=bool(source_map or dev),
                    dev=bool(dev),
                    template_dir=resolved.template_dir,
                    theme_image_dir=resolved.theme_image_dir,
                    assets_dir=resolved.assets_dir)

    log.sep(' sass-config > ') \
       .inf('Build For           : {}'.format(
           'Development' if run.dev else 'Production')) \
       .inf('SCSS Dir            : {}'.format(run.scss_dir)) \
       .inf('SCSS Files (Watch)  : {}'.format(os.path.join('**', '*.scss'))) \
       .inf('SCSS Files (Process): {}'.format(','.join(run.scss_files))) \
       .inf('CSS Dir             : {}'.format(run.css_dir)) \
       .inf('Source Map          : {}'.format(
           'Generate' if run.source_map else 'Remove')) \
       .inf('CSS Style           : {}'.format(run.style)) \
       .sep(' < sass-config ')

    return run
