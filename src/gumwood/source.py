"""Schema sources: live introspection over HTTP, saved JSON, stdin.

Each source returns the raw introspection response bytes for
:func:`gumwood.pipeline.run`.
"""

import json
import logging
from pathlib import Path
from typing import BinaryIO

import requests

from gumwood.errors import SourceError, UnsupportedSourceError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

INTROSPECTION_QUERY = """query IntrospectionQuery {
  __schema {
    queryType { name }
    mutationType { name }
    subscriptionType { name }
    types {
      ...FullType
    }
    directives {
      name
      description
      locations
      args {
        ...InputValue
      }
    }
  }
}

fragment FullType on __Type {
  kind
  name
  description
  fields(includeDeprecated: true) {
    name
    description
    args {
      ...InputValue
    }
    type {
      ...TypeRef
    }
    isDeprecated
    deprecationReason
  }
  inputFields {
    ...InputValue
  }
  interfaces {
    ...TypeRef
  }
  enumValues(includeDeprecated: true) {
    name
    description
    isDeprecated
    deprecationReason
  }
  possibleTypes {
    ...TypeRef
  }
}

fragment InputValue on __InputValue {
  name
  description
  type {
    ...TypeRef
  }
  defaultValue
}

fragment TypeRef on __Type {
  kind
  name
  ofType {
    kind
    name
    ofType {
      kind
      name
      ofType {
        kind
        name
        ofType {
          kind
          name
          ofType {
            kind
            name
            ofType {
              kind
              name
              ofType {
                kind
                name
              }
            }
          }
        }
      }
    }
  }
}
"""


class IntrospectionClient:
    """Runs the introspection query against a GraphQL endpoint."""

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.session = requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        self.session.close()

    def fetch(self, url: str, headers: dict[str, str] | None = None) -> bytes:
        """POST the introspection query to *url* and return the response body.

        Raises:
            SourceError: the request failed or the server answered non-2xx.
        """
        request_headers = {"Content-Type": "application/json", "Accept": "application/json"}
        request_headers.update(headers or {})
        payload = {"query": INTROSPECTION_QUERY, "operationName": "IntrospectionQuery"}

        logger.info("Introspecting %s", url)
        try:
            response = self.session.post(
                url,
                data=json.dumps(payload),
                headers=request_headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise SourceError(f"introspection request to {url} failed: {exc}") from exc

        logger.debug("Received %d bytes from %s", len(response.content), url)
        return response.content


def fetch_introspection(
    url: str,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> bytes:
    with IntrospectionClient(timeout=timeout) as client:
        return client.fetch(url, headers)


def read_json_file(path: Path) -> bytes:
    """Read a saved introspection response."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise SourceError(f"cannot read {path}: {exc}") from exc


def read_schema_file(path: Path) -> bytes:
    """SDL schema files are not supported; only introspection JSON is."""
    raise UnsupportedSourceError(
        f"generating from a GraphQL schema file ({path}) is not supported; "
        "use --json with an introspection response or --url"
    )


def read_stdin(stream: BinaryIO) -> bytes:
    data = stream.read()
    if not data or not data.strip():
        raise SourceError("no input on stdin; pass --url or --json, or pipe an introspection response")
    return data
