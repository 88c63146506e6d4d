import pytest

HEADER = "\t".join(
    ["Name", "Country", "Operator", "Users", "Purpose", "Detailed Purpose", "Class", "Type", "Class of Orbit"]
    + [f"col{i}" for i in range(9, 19)]
    + ["Date of Launch", "Expected Lifetime"]
)


def make_row(orbit="LEO", date="01/01/2005", n_fields=20):
    fields = [f"f{i}" for i in range(n_fields)]
    if n_fields > 8:
        fields[8] = orbit
    if n_fields > 19:
        fields[19] = date
    return "\t".join(fields)


def make_document(*rows):
    return "\n".join([HEADER, *rows]) + "\n"


class FakeResponse:
    def __init__(self, content=b"", status_code=200, reason="OK"):
        self.content = content
        self.status_code = status_code
        self.reason = reason

    def raise_for_status(self):
        import requests

        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} {self.reason}", response=self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response

    def close(self):
        pass


@pytest.fixture
def sample_text():
    return make_document(
        make_row("LEO", "01/01/2005"),
        make_row("GEO", "03/04/2005"),
        make_row("LEO", "07/12/1998"),
        make_row("Elliptical", "11/30/2010"),
        make_row("LEO", "", n_fields=20),
        make_row("MEO", "05/05/2001", n_fields=15),
        make_row("Sun-synchronous", "02/02/2010"),
    )
