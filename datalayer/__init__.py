"""Datalayer: validated analytics records from application events.

Three pieces make up the event-to-record pipeline:

- ``domains.schemas``: composable record schemas and the validator that
  enforces them.
- ``domains.data_layer`` and ``domains.dispatch``: the validating sink that
  fans records out to adapters, and the interception layer around an
  application's store dispatch.
- ``domains.location``: component tagging that stamps actions with the
  position in the view where they were dispatched.
"""

__version__ = "0.1.0"
