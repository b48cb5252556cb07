"""conncheck — connectivity diagnostics for environment-configured backends.

Quickstart::

    import os
    from conncheck.report import build_report

    report = await build_report(dict(os.environ))
    print(report.to_dict())
"""

__version__ = "1.0.0"
