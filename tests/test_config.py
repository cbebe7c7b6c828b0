import json

import pytest

from budget_engine import config


def test_load_config_reads_json(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps({'categories': [{'name': 'Other'}]}), encoding='utf-8')
    assert config.load_config(path) == {'categories': [{'name': 'Other'}]}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match='nope.json'):
        config.load_config(tmp_path / 'nope.json')


def test_bundled_taxonomy_path():
    assert config.TAXONOMY_PATH.name == 'categories.json'
    assert config.load_config(config.TAXONOMY_PATH)['categories'][0]['name'] == 'Food & Dining'
