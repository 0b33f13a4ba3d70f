# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

import logging
import ssl
import time
from typing import Optional

import requests
import urllib3
from requests.adapters import HTTPAdapter
from requests.auth import HTTPBasicAuth
from urllib3 import PoolManager
from urllib3.util.ssl_ import create_urllib3_context

from powerstore_exporter.config import StorageConfig
from powerstore_exporter.errors import AuthError

LOG = logging.getLogger(__name__)

TOKEN_HEADER = "DELL-EMC-TOKEN"
AUTH_COOKIE = "auth_cookie"
LOGIN_PATH = "login_session"

# (connect, read) seconds for every upstream call
REQUEST_TIMEOUT = (10, 60)
# Total seconds a REST call may take, body included
REQUEST_DEADLINE = 60
BODY_CHUNK_SIZE = 64 * 1024


class SSLAdapter(HTTPAdapter):
    """An HTTPS Transport Adapter that uses an explicit SSL context."""
    def __init__(self, verify_flags=ssl.VERIFY_X509_STRICT, **kwargs):
        self.verify_flags = verify_flags
        super().__init__(**kwargs)

    def init_poolmanager(self, connections, maxsize, block=False, **pool_kwargs):
        context = create_urllib3_context(verify_flags=self.verify_flags)
        self.poolmanager = PoolManager(num_pools=connections, maxsize=maxsize,
                                       block=block, ssl_context=context, **pool_kwargs)


def build_http_session(tls_validation: str = "none", tls_ca: Optional[str] = None,
                       pool_size: int = 50) -> requests.Session:
    """
    Return a requests.Session configured for the PowerStore REST API.

    Args:
        tls_validation: 'strict', 'normal', or 'none'
        tls_ca: Optional CA bundle used for 'normal' and 'strict'
        pool_size: Connection pool size, sized to the request budget
    """
    session = requests.Session()
    if tls_validation == "none":
        session.verify = False
        session.mount("https://", HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size))
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
    else:
        verify_flags = ssl.VERIFY_X509_STRICT if tls_validation == "strict" else ssl.VERIFY_DEFAULT
        session.mount("https://", SSLAdapter(verify_flags=verify_flags,
                                             pool_connections=pool_size, pool_maxsize=pool_size))
        session.verify = tls_ca if tls_ca else True

    session.headers.update({
        "Accept": "application/json",
        "Content-Type": "application/json"
    })
    return session


class PowerStoreSession:
    """
    Authenticated session state for one array.

    Holds the token and cookie captured at login. ``generation`` increases on
    every successful login so callers can tell whether the credentials they
    used are still the current ones.
    """

    def __init__(self, storage: StorageConfig, http: Optional[requests.Session] = None,
                 pool_size: int = 50):
        self.ip = storage.ip
        self.base_url = f"https://{storage.ip}/api/rest/"
        self._username = storage.user
        self._password = storage.password
        self.http = http if http is not None else build_http_session(
            storage.tls_validation, storage.tls_ca, pool_size)
        self.token = ""
        self.cookie = ""
        self.generation = 0

    def authenticate(self) -> None:
        """
        Log in and capture the token header and session cookie.

        Raises:
            AuthError: On any status other than 200/201 or a transport failure
        """
        url = self.base_url + LOGIN_PATH
        try:
            response = self.http.request(
                "GET", url,
                auth=HTTPBasicAuth(self._username, self._password),
                timeout=REQUEST_TIMEOUT,
                allow_redirects=False,
            )
        except requests.exceptions.RequestException as e:
            LOG.warning(f"Login request to {self.ip} failed: {e}")
            raise AuthError(f"login to {self.ip} failed: {e}") from e

        if response.status_code not in (200, 201):
            LOG.warning(f"Login to {self.ip} rejected with HTTP {response.status_code}")
            raise AuthError(f"login to {self.ip} rejected", status=response.status_code, body=response.text)

        self.token = response.headers.get(TOKEN_HEADER, "")
        self.cookie = response.cookies.get(AUTH_COOKIE, "") or ""
        self.generation += 1
        LOG.info(f"Authenticated to PowerStore at {self.ip}")

    def auth_headers(self) -> dict:
        return {TOKEN_HEADER: self.token}

    def auth_cookies(self) -> dict:
        return {AUTH_COOKIE: self.cookie}


def read_body(response: requests.Response, deadline: float) -> bytes:
    """
    Read a streamed response body, giving up once ``deadline`` passes.

    Args:
        response: A response requested with ``stream=True``
        deadline: A ``time.monotonic()`` value

    Raises:
        requests.exceptions.Timeout: The body was still arriving at the deadline
    """
    chunks = []
    for chunk in response.iter_content(chunk_size=BODY_CHUNK_SIZE):
        chunks.append(chunk)
        if time.monotonic() > deadline:
            response.close()
            raise requests.exceptions.Timeout(f"response body not complete after {REQUEST_DEADLINE}s")
    return b"".join(chunks)
