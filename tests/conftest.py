import os

import pytest

ENV_VARS = (
    "MODEL_PROVIDER",
    "MODEL_NAME",
    "GEMINI_API_KEY",
    "OPENAI_API_KEY",
    "ALGOLIA_APP_ID",
    "ALGOLIA_ADMIN_API_KEY",
    "ALGOLIA_INDEX_NAME",
)


@pytest.fixture
def isolated_env(monkeypatch):
    """
    Give the test a private copy of os.environ without pipeline settings,
    so values loaded by python-dotenv don't leak into other tests.
    """
    env = os.environ.copy()
    for name in ENV_VARS:
        env.pop(name, None)
    monkeypatch.setattr(os, "environ", env)
    return env
