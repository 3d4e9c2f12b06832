# type: ignore

from invoke import task, Collection


@task
def pytest(ctx):
    """Run the unit tests with py.test."""
    ctx.run('py.test --cov={} --cov-report=term-missing test'.format(
        ctx.package))


@task
def doctest(ctx):
    """Check the codec examples in the README and module docstrings."""
    ctx.run('py.test --doctest-glob=README.md --doctest-modules '
            'README.md {}'.format(ctx.package))


@task(pytest, doctest)
def all(ctx):
    """Run all test utilities."""
    pass


ns = Collection(pytest, doctest)
ns.add_task(all, default=True)
