from dataclasses import dataclass

from echoclient.core.ports.handler import ConnectionHandler


@dataclass
class ClientConfig:
    """
    Static configuration for an EchoClient.

    This structure defines all parameters required to open a connection:
    the handler receiving connection events, the remote address and the
    timeouts bounding each phase of the session.
    """
    handler: ConnectionHandler
    """
    Callback object notified of connection-established, data-received
    and error events.
    """

    host: str
    """
    IP address or hostname of the remote server.
    """

    port: int
    """
    TCP port of the remote server.
    """

    connect_timeout: float = 5.0
    """
    Maximum time (in seconds) allowed to establish the TCP connection.
    """

    run_timeout: float | None = None
    """
    Maximum lifetime (in seconds) of the session. None waits until the
    server closes the connection or a stop signal is received.
    """

    timeout_graceful_shutdown: float = 5.0
    """
    Maximum time (in seconds) to wait for the transport to report
    connection_lost after it has been asked to close.
    """
