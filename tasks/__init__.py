# type: ignore

from shlex import join

from invoke import task, Collection

from . import lint, test


@task
def clean(ctx):
    """Delete the build, test and type check artifacts."""
    for name in ['.coverage', '.mypy_cache', '.pytest_cache', 'build',
                 'dist', '{}.egg-info'.format(ctx.package)]:
        ctx.run(join(['rm', '-rf', name]))


@task(test.all, lint.all)
def validate(ctx):
    """Run all tests, type checks, and linters."""
    pass


ns = Collection(clean)
ns.add_task(validate, default=True)
ns.add_collection(test)
ns.add_collection(lint)

ns.configure({
    'package': 'utf7imap',
    'run': {
        'echo': True,
        'pty': True,
    }
})
