import glob
import os
import pathlib
import subprocess
import typing

import logger


def remove_files(pattern: str, log: logger.Log) -> typing.List[pathlib.Path]:
    """ remove every regular file matching the glob pattern """

    removed = []

    for name in sorted(glob.glob(pattern)):
        path = pathlib.Path(name)
        if not path.is_file():
            continue

        path.unlink()
        log.dbg('Removed {}'.format(path))
        removed.append(path)

    return removed


def run_logged(cmd: typing.Iterable[str],
               log: logger.Log,
               env: typing.Mapping[str, str] = None,
               check: bool = True,
               timeout: float = None) -> subprocess.CompletedProcess:
    """
    Run a subprocess and mirror its output to the log.
    Raises CalledProcessError when check is set and the command failed,
    and TimeoutExpired when it ran longer than timeout seconds.
    """

    cmd = list(cmd)
    log.dbg('Running {}'.format(' '.join(cmd)))

    result = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        env=dict(os.environ, **env) if env else None,
        timeout=timeout,
    )

    for line in (result.stdout + result.stderr).splitlines():
        if line.strip():
            log.dbg(line, indent=2)

    if check and result.returncode != 0:
        raise subprocess.CalledProcessError(
            result.returncode, result.args, output=result.stdout,
            stderr=result.stderr,
        )

    return result
