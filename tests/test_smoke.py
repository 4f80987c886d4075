"""
Smoke test: the basic usage path end to end
"""

import sys

import errchain


def test_static_error_to_stdout(capsys):
    e = errchain.new_from_static("Test!")
    assert e is not None

    rc = errchain.render_to_stream(None, e, "\n", sys.stdout)
    assert rc >= 0

    errchain.destroy(e)

    assert capsys.readouterr().out == "Test!\n"


def test_context_stacking():
    def read_settings():
        return errchain.new_from_copy("permission denied")

    def load_profile(name):
        err = read_settings()
        return errchain.wrap_formatted(err, "cannot load profile %r", name)

    def start():
        return errchain.wrap_copy(load_profile("default"), "startup failed")

    e = start()
    try:
        assert errchain.render_to_string(e, header="error: ") == (
            "error: startup failed: cannot load profile 'default': permission denied"
        )
    finally:
        errchain.destroy(e)
