# File: log_feed.py
"""
log_feed.py

Log producers for the console. A resource that can stream container logs
implements the Tailable capability; DockerService does so for compose
services (or bare containers) through the Docker SDK. Streams are pushed
line by line into a sink on a background thread until they end or the
session's cancel token fires.
"""
import threading
from abc import ABC, abstractmethod

import docker

PROJECT_LABEL = 'com.docker.compose.project'
SERVICE_LABEL = 'com.docker.compose.service'


class LogStreamError(Exception):
    pass


class NotTailableError(LogStreamError):
    pass


class StreamStartError(LogStreamError):
    pass


class Tailable(ABC):
    """Capability of resources whose containers can be tailed."""

    @abstractmethod
    def containers(self, namespace, name) -> list[str]:
        """Names of the containers backing the resource, in display order."""

    @abstractmethod
    def logs(self, sink, token, namespace, name, container, tail):
        """
        Start pushing decoded lines of `container` into `sink`, beginning with
        the last `tail` lines. Cleanup for anything acquired must be registered
        with `token.on_cancel` as soon as it exists. Raises if the stream cannot
        be opened; once streaming, the only end signal is `sink.close()`.
        """


def is_tailable(resource) -> bool:
    return isinstance(resource, Tailable)


def require_tailable(resource):
    if not is_tailable(resource):
        raise NotTailableError(f"Resource {type(resource).__name__} is not tailable")
    return resource


def namespaced(path: str):
    """Split 'project/service' into its parts; a bare name has no namespace."""
    if '/' not in path:
        return '', path
    ns, name = path.split('/', 1)
    return ns, name


class DockerService(Tailable):
    def __init__(self, docker_client=None, event_log=None):
        self.docker_client = docker_client or docker.from_env()
        self.event_log = event_log

    def containers(self, namespace, name) -> list[str]:
        if not namespace:
            return [self.docker_client.containers.get(name).name]
        found = self.docker_client.containers.list(filters={
            'label': [f'{PROJECT_LABEL}={namespace}', f'{SERVICE_LABEL}={name}'],
            'status': 'running',
        })
        return sorted(c.name for c in found)

    def logs(self, sink, token, namespace, name, container, tail):
        c = self.docker_client.containers.get(container)
        stream = c.logs(stream=True, follow=True, tail=tail, timestamps=False)
        token.on_cancel(stream.close)
        thread = threading.Thread(target=self._stream_logs, args=(container, stream, sink, token), daemon=True)
        thread.start()

    def _stream_logs(self, container, stream, sink, token):
        try:
            for raw in stream:
                if token.cancelled:
                    break
                for line in raw.decode('utf-8', errors='ignore').splitlines():
                    sink.put(line.rstrip())
        except Exception as e:
            if not token.cancelled and self.event_log is not None:
                self.event_log.error(container, f"Log stream aborted: {e}")
        finally:
            sink.close()
