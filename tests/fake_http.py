import json


class FakeResponse:
    """Stands in for aiohttp.ClientResponse"""

    def __init__(self, status=200, payload=None, text=None, body=None):
        self.status = status
        if body is None:
            body = (text if text is not None else json.dumps(payload)).encode("utf-8")
        self._body = body

    async def read(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Session factory and session in one; records every request"""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse(payload={})
        self.error = error
        self.calls = []
        self.init_kwargs = None

    def __call__(self, **kwargs):
        self.init_kwargs = kwargs
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response
