from endpoints.logs import log_error


def test_log_error_leaves_caller_context_untouched():
    context = {"event": "join"}
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        log_error("Handler failed", e, connection_id="c1", context=context)
    assert context == {"event": "join"}


def test_log_error_without_context():
    log_error("Handler failed", ValueError("bad"))
