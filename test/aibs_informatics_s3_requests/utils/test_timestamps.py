from datetime import datetime, timedelta, timezone

from pytest import mark, param, raises

from aibs_informatics_s3_requests.utils.timestamps import (
    format_http_date,
    format_iso8601,
    normalize_timestamp,
)

INSTANT = datetime(2015, 10, 21, 7, 28, tzinfo=timezone.utc)


@mark.parametrize(
    "value, expected",
    [
        param(None, None, id="None stays None"),
        param(INSTANT, INSTANT, id="aware datetime"),
        param(datetime(2015, 10, 21, 7, 28), INSTANT, id="naive datetime is UTC"),
        param(
            datetime(2015, 10, 21, 0, 28, tzinfo=timezone(timedelta(hours=-7))),
            INSTANT,
            id="offset datetime converted to UTC",
        ),
        param("2015-10-21T07:28:00Z", INSTANT, id="ISO 8601 string"),
        param("2015-10-21T00:28:00-07:00", INSTANT, id="ISO 8601 string with offset"),
        param("Wed, 21 Oct 2015 07:28:00 GMT", INSTANT, id="RFC 822 string"),
        param(1445412480, INSTANT, id="epoch seconds"),
        param("1445412480", INSTANT, id="epoch seconds string"),
    ],
)
def test__normalize_timestamp(value, expected):
    actual = normalize_timestamp(value)
    assert actual == expected
    if actual is not None:
        assert actual.tzinfo == timezone.utc


def test__normalize_timestamp__fails_for_unparseable_string():
    with raises(ValueError):
        normalize_timestamp("not a timestamp")


def test__format_http_date__renders_gmt():
    assert format_http_date(INSTANT) == "Wed, 21 Oct 2015 07:28:00 GMT"
    assert format_http_date(INSTANT.replace(microsecond=123)) == "Wed, 21 Oct 2015 07:28:00 GMT"


@mark.parametrize(
    "value, expected",
    [
        param(INSTANT, "2015-10-21T07:28:00Z", id="whole seconds"),
        param(INSTANT.replace(microsecond=500000), "2015-10-21T07:28:00.500000Z", id="micros"),
        param(
            datetime(2015, 10, 21, 9, 28, tzinfo=timezone(timedelta(hours=2))),
            "2015-10-21T07:28:00Z",
            id="converted to UTC",
        ),
    ],
)
def test__format_iso8601(value, expected):
    assert format_iso8601(value) == expected
