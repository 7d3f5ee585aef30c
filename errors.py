import pathlib
import typing


class SassDevError(Exception):
    pass


class ConfigError(SassDevError):
    """ Configuration that cannot be resolved. Always fatal. """


class CompileError(SassDevError):
    def __init__(self,
                 plugin: str,
                 path: typing.Optional[pathlib.Path],
                 message: str) -> None:

        super().__init__(message)

        self.plugin = plugin
        self.path = path
        self.message = message

    def __str__(self) -> str:
        if self.path is None:
            return '{}: {}'.format(self.plugin, self.message)
        return '{}: {}: {}'.format(self.plugin, self.path, self.message)


class ImageError(SassDevError):
    def __init__(self,
                 failures: typing.Sequence[typing.Tuple[pathlib.Path, str]]
                 ) -> None:

        super().__init__('{} image(s) could not be optimized'.format(
            len(failures),
        ))

        self.failures = tuple(failures)
