import datetime
import sys
import typing


ADVISORY = "Use the 'usage' command for help"

SEPARATOR_WIDTH = 69

TAGS = {
    'debug': 'DBG ',
    'info': '',
    'warning': 'WRN ',
    'error': 'ERR ',
}


def fit_length(text: object,
               length: int,
               pad: str = ' ',
               pad_right: bool = False) -> str:
    """ fit text to fixed width


    Shorter text will be padded.
    >>> fit_length(7, 2, '0')
    '07'
    >>> fit_length('sass', 8, pad_right=True)
    'sass    '

    Longer text will be cut.
    >>> fit_length('imagemin-config', 8)
    'imagemin'
    """

    text = str(text)

    if len(text) < length:
        padding = (pad * length)[:length - len(text)]
        return text + padding if pad_right else padding + text

    return text[:length]


def timestamp(now: datetime.datetime = None) -> str:
    """
    >>> timestamp(datetime.datetime(2018, 1, 2, 3, 4, 5))
    '03:04:05'
    """

    now = now or datetime.datetime.now()

    return ':'.join(fit_length(x, 2, '0')
                    for x in (now.hour, now.minute, now.second))


class Log:
    def __init__(self,
                 prefix: str = '',
                 beep: bool = False,
                 verbose: bool = False,
                 stream: typing.TextIO = None) -> None:

        self.prefix = fit_length(prefix.upper(), 8, pad_right=True) \
            if prefix else ''
        self.beep = beep
        self.verbose = verbose
        self.stream = stream if stream is not None else sys.stdout

    def __str__(self) -> str:
        return '<Log {}>'.format(self.prefix.strip() or 'time')

    def log(self,
            text: typing.Union[str, typing.Iterable[str]],
            level: str = 'info',
            indent: int = 0,
            beep: bool = False,
            prefix: str = '') -> 'Log':

        if not isinstance(text, str):
            for line in text:
                self.log(line, level, indent, beep, prefix)
            return self

        if level == 'debug' and not self.verbose:
            return self

        if prefix:
            head = fit_length(prefix.upper(), 8, pad_right=True)
        else:
            head = self.prefix or timestamp()

        print('[{}] {}{}{}{}'.format(
            head,
            TAGS[level],
            ' ' * indent,
            text,
            '\a' if beep and self.beep else '',
        ), file=self.stream, flush=True)

        return self

    def dbg(self, text, indent: int = 0, beep: bool = False) -> 'Log':
        return self.log(text, 'debug', indent, beep)

    def inf(self, text, indent: int = 0, beep: bool = False) -> 'Log':
        return self.log(text, 'info', indent, beep)

    def wrn(self, text, indent: int = 0, beep: bool = False) -> 'Log':
        return self.log(text, 'warning', indent, beep)

    def err(self, text, indent: int = 0, beep: bool = False) -> 'Log':
        return self.log(text, 'error', indent, beep)

    def don(self, name: str) -> 'Log':
        return self.log(name.upper() + ' Done', beep=True)

    def sep(self, title: str = '', char: str = '=') -> 'Log':
        title = title.upper()
        return self.log(char * 2
                        + title
                        + char * (SEPARATOR_WIDTH - 2 - len(title)))

    def bell(self) -> 'Log':
        self.stream.write('\a')
        self.stream.flush()
        return self

    def fatal(self, text: str, indent: int = 0) -> typing.NoReturn:
        self.err(text, indent, beep=True)
        self.err(ADVISORY, indent)
        raise SystemExit(1)
