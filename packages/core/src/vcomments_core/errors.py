class TemplateError(Exception):
    """A comment template could not be parsed or expanded.

    Raised before anything is posted for the violation being rendered; the
    run stops and nothing is retried.
    """
