"""
Shared fixtures for pipeline function tests.
"""

import pytest
from lxml import etree
from pipeline_functions import FunctionsConfig
from pipeline_functions import XPathEvaluator
from pipeline_functions import create_registry
from pipeline_functions.models import ENV_DECODER
from pipeline_functions.models import ENV_NAMESPACE
from pipeline_functions.models import ENV_PREFIX
from pipeline_functions.testing import DeploymentDecoder
from pipeline_functions.testing import RecordingDecoder


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for name in (ENV_DECODER, ENV_NAMESPACE, ENV_PREFIX):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def deployment():
    return DeploymentDecoder(base_path="/orders", version="3.2")


@pytest.fixture
def decoder(deployment):
    return RecordingDecoder(deployment)


@pytest.fixture
def registry(decoder):
    return create_registry(FunctionsConfig(), decoder=decoder)


@pytest.fixture
def evaluator(registry):
    return XPathEvaluator(registry)


@pytest.fixture
def page():
    return etree.fromstring(
        b"""<page>
  <link href="/3.2/css/site.css"/>
  <link href="/img/logo.png"/>
  <script>/3.2/js/app.js</script>
</page>"""
    )
