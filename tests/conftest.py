import json

import pytest

from rolegate import build_engine


@pytest.fixture
def shop_config():
    """guest < member < admin, a small catalog and rules on every level."""
    return {
        "default": "deny",
        "roles": {"guest": [], "member": ["guest"], "admin": ["member"]},
        "resources": {
            "index": ["index"],
            "login": ["index", "submit"],
            "shop": ["index", "view", "buy"],
            "admin": ["index", "users"],
        },
        "allow": {
            "guest": {"index": ["*"], "login": ["*"], "shop": ["index", "view"]},
            "member": {"shop": ["buy"]},
            "admin": {"*": ["*"]},
        },
        "deny": {
            "member": {"login": ["submit"]},
        },
    }


@pytest.fixture
def shop_engine(shop_config):
    return build_engine(shop_config)


@pytest.fixture
def config_file(tmp_path, shop_config):
    p = tmp_path / "acl.json"
    p.write_text(json.dumps(shop_config), encoding="utf-8")
    return str(p)
