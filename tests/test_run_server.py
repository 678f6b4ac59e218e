import pytest
import uvicorn

import run_server


def test_launcher_writes_crash_to_log_file(tmp_path, monkeypatch):
    log_file = tmp_path / "crash.log"
    monkeypatch.setattr(run_server, "CRASH_LOG", log_file)
    # keep pytest's own faulthandler stream in place
    monkeypatch.setattr(run_server.faulthandler, "enable", lambda *a, **k: None)

    def refuse(*args, **kwargs):
        raise RuntimeError("address already in use")

    monkeypatch.setattr(uvicorn, "run", refuse)

    try:
        with pytest.raises(RuntimeError):
            run_server.main()
    finally:
        for handler in list(run_server.logger.handlers):
            run_server.logger.removeHandler(handler)
            handler.close()

    text = log_file.read_text(encoding="utf-8")
    assert "starting backoffice" in text
    assert "backoffice crashed" in text
    assert "address already in use" in text
