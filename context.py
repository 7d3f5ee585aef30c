import argparse
import pathlib
import time
import typing

import config
import logger
import paths
import styles
import watch


class Context:
    """ state shared by every task of one run


    The run configuration is resolved on first use and kept for the rest of
    the process.
    """

    def __init__(self,
                 options: argparse.Namespace,
                 log: logger.Log,
                 cwd: pathlib.Path = None) -> None:

        self.options = options
        self.log = log
        self.cwd = cwd if cwd is not None else pathlib.Path.cwd()

        self.prefixer = styles.Prefixer(log)
        self.watcher: typing.Optional[watch.Watcher] = None
        self.reloader: typing.Optional[watch.Reloader] = None

        self._run: typing.Optional[config.RunConfig] = None

    @property
    def run(self) -> config.RunConfig:
        if self._run is None:
            resolved = paths.resolve_paths(
                self.log,
                scss_dir=self.options.scss_dir,
                css_dir=self.options.css_dir,
                drupal_root=self.options.drupal_root,
                theme=self.options.theme,
                cwd=self.cwd,
            )
            self._run = config.build_run_config(
                resolved,
                self.log,
                scss_files=self.options.scss_files,
                style=self.options.style,
                source_map=self.options.source_map,
                dev=self.options.dev,
            )
        return self._run

    @property
    def resolved(self) -> typing.Optional[config.RunConfig]:
        """ the run configuration if some task already needed it """

        return self._run

    @property
    def listening(self) -> bool:
        return self.watcher is not None or self.reloader is not None

    def wait(self) -> None:
        """ block until interrupted while watchers are active """

        if not self.listening:
            return

        self.log.inf('Press Ctrl+C to terminate')
        try:
            if self.reloader is not None:
                self.reloader.serve(self.cwd)
            else:
                while True:
                    time.sleep(1)
        except KeyboardInterrupt:
            self.log.inf('Interrupted')
        finally:
            self.stop()

    def stop(self) -> None:
        if self.watcher is not None:
            self.watcher.stop()
            self.watcher = None
