import shutil
import subprocess
import sys

import logger
import utils


APP_ID = 'sassdev'

NOTIFY_TIMEOUT = 10


def notify(title: str, message: str, log: logger.Log) -> bool:
    """ show a desktop notification if the platform has a way to do it """

    if sys.platform == 'darwin' and shutil.which('osascript'):
        cmd = ['osascript', '-e', 'display notification {} with title {}'.format(
            _quote(message), _quote(title),
        )]
    elif shutil.which('notify-send'):
        cmd = ['notify-send', '--app-name', APP_ID, title, message]
    else:
        log.dbg('No notification command available')
        return False

    try:
        utils.run_logged(cmd, log, timeout=NOTIFY_TIMEOUT)
    except (OSError, subprocess.SubprocessError) as e:
        log.wrn('Notification failed: {}'.format(e))
        return False

    return True


def _quote(text: str) -> str:
    """
    >>> _quote('say "hi"')
    '"say \\\\"hi\\\\""'
    """

    return '"{}"'.format(text.replace('\\', '\\\\').replace('"', '\\"'))
