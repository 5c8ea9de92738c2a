import os

# Keep user/CI environment from leaking into CLI option defaults
for _var in (
    "NAMESPACE",
    "HELM_PROM_RELEASE",
    "HELM_GRAFANA_RELEASE",
    "HELM_LOKI_RELEASE",
    "HELM_VALUES_DIR",
    "K8S_MANIFEST_DIR",
    "WAIT_TIMEOUT",
    "SLACK_WEBHOOK",
    "K8S_BACKEND",
):
    os.environ.pop(_var, None)

from tests.fixtures import *  # noqa: E402,F401,F403
