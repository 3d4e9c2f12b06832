# type: ignore

from invoke import task, Collection


@task
def flake8(ctx):
    """Run the flake8 linter."""
    ctx.run('flake8 {} test {} setup.py'.format(ctx.package, __package__))


@task
def bandit(ctx):
    """Run the bandit linter on the library code."""
    ctx.run('bandit -qr {}'.format(ctx.package))


@task
def mypy(ctx):
    """Run the mypy type checker."""
    ctx.run('mypy {} test'.format(ctx.package))


@task(flake8, bandit, mypy)
def all(ctx):
    """Run all linters and the type checker."""
    pass


ns = Collection(flake8, bandit, mypy)
ns.add_task(all, default=True)
