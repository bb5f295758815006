"""
Tests for the command-line entry point.
"""

import os
import pytest

from roitrack import app as cli

CONFIG_PATH = os.path.join(os.path.dirname(__file__), '..', 'configs', 'default.yaml')


class TestMain:
    """Tests for app.main."""
    
    def test_serve_runs_api(self, monkeypatch):
        calls = {}
        
        def fake_run_api(host, port, api_app):
            calls.update(host=host, port=port, app=api_app)
        monkeypatch.setattr(cli, 'run_api', fake_run_api)
        
        cli.main(['--config', CONFIG_PATH, '--serve', '--host', '127.0.0.1', '--port', '9001'])
        
        assert calls['host'] == '127.0.0.1'
        assert calls['port'] == 9001
        engine = calls['app'].state.engine_state['engine']
        assert engine.roi.is_defined
        assert engine.config.match_threshold == 150
    
    def test_pipeline_mode(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(cli, 'run_api', lambda **kw: pytest.fail('API should not start'))
        
        cli.main(['--config', CONFIG_PATH, '--max-ticks', '3'])
        
        assert (tmp_path / 'outputs' / 'tracks.jsonl').exists()
