import functools
import os.path
import pathlib
import typing

from context import Context
from errors import CompileError, ConfigError, ImageError, SassDevError
import fileset
import images
import javascript
import notify
import styles
import watch


class TaskResult(typing.NamedTuple):
    stage: str
    error: typing.Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


TaskType = typing.Callable[[Context], TaskResult]

# stages whose failures are reported without stopping the process
RECOVERABLE = frozenset(['sass', 'imagemin'])

tasks: typing.Dict[str, TaskType] = {}


def task(name: str) -> typing.Callable[[typing.Callable[[Context], None]],
                                       TaskType]:
    def __(fun: typing.Callable[[Context], None]) -> TaskType:
        @functools.wraps(fun)
        def run(ctx: Context) -> TaskResult:
            try:
                fun(ctx)
            except (SassDevError, OSError) as e:
                return TaskResult(name, e)
            return TaskResult(name)

        tasks[name] = run
        return run
    return __


def handle_result(result: TaskResult, ctx: Context) -> TaskResult:
    """ decide what a failed stage means for the process """

    if result.ok:
        return result

    error = result.error
    if isinstance(error, ConfigError) or result.stage not in RECOVERABLE:
        ctx.log.fatal(str(error))

    ctx.log.err('{} failed: {}'.format(result.stage, error))

    if isinstance(error, CompileError):
        title = 'Error in {}'.format(error.plugin)
        message = str(error.path) if error.path is not None else str(error)
    elif isinstance(error, ImageError):
        title = 'Error in imagemin'
        message = ', '.join(str(path) for path, _ in error.failures)
    else:
        title = 'Error in {}'.format(result.stage)
        message = str(error)

    notify.notify(title, message, ctx.log)
    ctx.log.bell()

    return result


def run(names: typing.Iterable[str], ctx: Context) -> typing.List[TaskResult]:
    return [handle_result(tasks[name](ctx), ctx) for name in names]


@task('sassclean')
def sass_clean(ctx: Context) -> None:
    styles.clean(ctx.run, ctx.log)


@task('sass')
def sass_preprocess(ctx: Context) -> None:
    styles.clean(ctx.run, ctx.log)
    styles.preprocess(ctx.run, ctx.log, ctx.prefixer)


@task('watch')
def sass_watch(ctx: Context) -> None:
    if ctx.watcher is not None:
        return

    ctx.log.inf('Watching {}'.format(ctx.run.watch_pattern))

    ctx.watcher = watch.Watcher(
        ctx.run.scss_dir,
        lambda: handle_result(tasks['sass'](ctx), ctx),
        ctx.log,
    )
    ctx.watcher.start()


@task('livereload')
def livereload(ctx: Context) -> None:
    files = fileset.WatchFileSet(ctx.options.live_reload)
    if ctx.resolved is not None:
        files.add([ctx.resolved.css_pattern, ctx.resolved.template_pattern])

    if not files:
        ctx.log.wrn('Nothing to watch for LiveReload') \
               .wrn('Did you miss the parameter to add livereload files?')
        return

    ctx.log.sep(' livereload-config > ') \
           .inf('Watching for LiveReload:') \
           .inf(list(files), indent=2) \
           .sep(' < livereload-config ')

    if ctx.reloader is None:
        ctx.reloader = watch.Reloader(ctx.log)

    for pattern in files:
        ctx.reloader.watch(pattern)


@task('imagemin')
def imagemin(ctx: Context) -> None:
    directories = fileset.ImageDirectorySet(ctx.options.imagemin)
    if ctx.resolved is not None:
        directories.add([ctx.resolved.theme_image_dir,
                         ctx.resolved.assets_dir])

    if not directories:
        ctx.log.wrn('No image directories to process') \
               .wrn('Did you miss the parameter to add image directories?')
        return

    ctx.log.sep(' imagemin-config > ') \
           .inf('Image Directories:') \
           .inf(list(directories), indent=2) \
           .sep(' < imagemin-config ')

    images.optimize_all(directories, ctx.log)


@task('uglifyjs')
def uglifyjs(ctx: Context) -> None:
    options = ctx.options
    source = pathlib.Path(options.uglify_source) if options.uglify_source \
        else ctx.cwd
    dest = pathlib.Path(options.uglify_dest) if options.uglify_dest \
        else ctx.cwd
    bundle = javascript.bundle_name(options.uglify_file or '')

    ctx.log.sep(' uglifyjs-config > ') \
           .inf('Source Dir     : {}'.format(os.path.join(str(source), '*.js'))) \
           .inf('Destination Dir: {}'.format(dest)) \
           .inf('Ugly File      : {}'.format(bundle or 'Not provided')) \
           .inf('Source Map     : Remove') \
           .sep(' < uglifyjs-config ')

    if options.source_map:
        ctx.log.wrn('Source maps are not generated for minified scripts')

    if not os.path.isdir(str(source)):
        raise ConfigError("JavaScript source directory '{}' is not valid".format(
            source,
        ))

    javascript.minify(source, dest, bundle, ctx.log)


USAGE = [
    'Usage: sassdev [command] [options]',
    'Commands:',
    '  [default]           Execute all features',
    '  imagemin            Minify images',
    '  livereload          Watch CSS and template files, and reload browser,',
    '                      requires a LiveReload browser extension, see',
    '                      http://livereload.com/extensions/',
    '  sasswatch           Watch Sass directory and execute preprocessor',
    '  sass                Execute only Sass preprocessor',
    '  sassclean           Remove *.map files',
    '  uglifyjs            Minify JavaScript files',
    '  usage               Display usage information',
    'Options:',
    '  -B, --beep          Beep on completion of important task      [boolean]',
    '  -D, --dev           Use Development options for building      [boolean]',
    '  -V, --verbose       Log detailed messages                     [boolean]',
    '  -d, --drupal-root   Drupal root directory, use with -t       [optional]',
    '  -t, --theme         Drupal theme directory name, use with -d',
    '  -s, --scss-dir      SCSS directory to watch and process, use with -c',
    '  -c, --css-dir       CSS directory for SASS output, use with -s',
    '  -e, --scss-files    SCSS files to preprocess, comma-delimited',
    '  -y, --style         Sass output style, compact|compressed|expanded|nested',
    '  -m, --source-map    Creates sourcemap (*.map) files           [boolean]',
    '  -l, --live-reload   Files to watch for livereload, comma-delimited',
    '  -i, --imagemin      Image directories to minify, comma-delimited',
    '  -u, --uglify-source Uglify JS source directory',
    '  -v, --uglify-dest   Uglify JS destination directory',
    '  -w, --uglify-file   Uglify JS destination file if to be merged',
    'Examples:',
    '  sassdev',
    '  sassdev sass',
    '  sassdev -BDm -d /var/www/d8 -t mytheme',
    '  sassdev --beep --drupal-root /var/www/d8 --theme mytheme',
]


@task('usage')
def usage(ctx: Context) -> None:
    ctx.log.sep(' usage > ') \
           .inf(USAGE) \
           .sep(' < usage ')
