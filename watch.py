import fnmatch
import os.path
import pathlib
import threading
import typing

import livereload
from watchdog.events import FileSystemEvent, PatternMatchingEventHandler
from watchdog.observers import Observer

import logger


LIVERELOAD_PORT = 35729


class Watcher(PatternMatchingEventHandler):
    """ run a callback whenever a matching file below the directory changes """

    def __init__(self,
                 src: pathlib.Path,
                 callback: typing.Callable[[], object],
                 log: logger.Log,
                 patterns: typing.Sequence[str] = ('*.scss',)) -> None:

        super().__init__(patterns=list(patterns), ignore_directories=True)

        self.src = src
        self.callback = callback
        self.log = log

        self._lock = threading.Lock()

        self.observer = Observer()
        self.observer.schedule(self, str(src), recursive=True)

    def __str__(self) -> str:
        return '<watch.Watcher {}>'.format(self.src)

    def start(self) -> None:
        self.observer.start()

    def stop(self) -> None:
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join()

    def on_created(self, event: FileSystemEvent) -> None:
        self.process(event.src_path, 'added')

    def on_modified(self, event: FileSystemEvent) -> None:
        self.process(event.src_path, 'changed')

    def on_deleted(self, event: FileSystemEvent) -> None:
        self.process(event.src_path, 'removed')

    def on_moved(self, event: FileSystemEvent) -> None:
        self.process(event.dest_path, 'added')

    def process(self, path: typing.Union[str, bytes], action: str) -> None:
        path = os.fsdecode(path)
        if os.path.basename(path).startswith('.'):
            return

        self.log.inf('File {} was {}'.format(path, action))

        # one rebuild at a time
        with self._lock:
            self.callback()


def split_recursive(pattern: str) -> typing.Tuple[str, typing.Optional[str]]:
    """ split a `dir/**/glob` pattern into directory and file glob

    >>> split_recursive('theme/templates/**/*.twig')
    ('theme/templates', '*.twig')
    >>> split_recursive('theme/css/*.css')
    ('theme/css/*.css', None)
    """

    marker = os.sep + '**' + os.sep
    if marker not in pattern:
        return pattern, None

    base, tail = pattern.split(marker, 1)
    return base, os.path.basename(tail) or '*'


class Reloader:
    """ live reload server telling connected browsers about changed files """

    def __init__(self,
                 log: logger.Log,
                 host: str = '127.0.0.1',
                 port: int = LIVERELOAD_PORT) -> None:

        self.log = log
        self.host = host
        self.port = port
        self.patterns: typing.List[str] = []

        self.server = livereload.Server()

    def __str__(self) -> str:
        return '<watch.Reloader {}:{}>'.format(self.host, self.port)

    def watch(self, pattern: str) -> None:
        base, glob = split_recursive(pattern)

        if glob is None:
            self.server.watch(pattern)
        else:
            self.server.watch(
                base,
                ignore=lambda name: not fnmatch.fnmatch(os.path.basename(name),
                                                        glob),
            )

        self.patterns.append(pattern)

    def serve(self, root: pathlib.Path) -> None:
        self.log.inf('LiveReload listening on {}:{}'.format(self.host,
                                                           self.port))
        self.server.serve(port=self.port, host=self.host, root=str(root))
