"""Kubernetes credential loading."""

from __future__ import annotations

import structlog
from kubernetes_asyncio import client
from kubernetes_asyncio import config as k8s_config

from podwatcher.errors import ConfigurationError

_log = structlog.get_logger(component="kube")


async def load_credentials(kubeconfig: str = "") -> client.ApiClient:
    """Configure the client and return an ApiClient.

    An explicit *kubeconfig* path must load. Without one, the default
    kubeconfig location is tried first, then the in-cluster service account.
    Raises ConfigurationError when no usable credentials are found.
    """
    try:
        if kubeconfig:
            await k8s_config.load_kube_config(config_file=kubeconfig)
            _log.info("k8s client configured from kubeconfig", path=kubeconfig)
        else:
            try:
                await k8s_config.load_kube_config()
                _log.info("k8s client configured from default kubeconfig")
            except (k8s_config.ConfigException, OSError):
                # load_incluster_config() is synchronous in kubernetes-asyncio
                k8s_config.load_incluster_config()
                _log.info("k8s client configured from in-cluster service account")
    except (k8s_config.ConfigException, OSError, ValueError) as exc:
        raise ConfigurationError(f"could not load Kubernetes config: {exc}") from exc

    return client.ApiClient()
