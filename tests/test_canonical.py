import itertools
import unittest

from apisig.canonical import (
    canonical_headers,
    canonical_query_string,
    canonical_request,
    canonical_signed_headers,
    uri_encode_component,
    uri_encode_path,
)
from apisig.constants import EMPTY_SHA256_HASH


class TestQueryString(unittest.TestCase):

    def test_empty(self) -> None:
        self.assertEqual(canonical_query_string({}), '')

    def test_sorted_by_key(self) -> None:
        self.assertEqual(
            canonical_query_string({'zebra': '1', 'apple': '2', 'banana': '3'}),
            'apple=2&banana=3&zebra=1'
        )

    def test_key_order_does_not_matter(self) -> None:
        items = [('b', '2'), ('a', '1'), ('C', '3'), ('_x', '4')]
        results = {canonical_query_string(dict(perm)) for perm in itertools.permutations(items)}

        self.assertEqual(results, {'C=3&_x=4&a=1&b=2'})

    def test_reserved_characters_escaped(self) -> None:
        self.assertEqual(
            canonical_query_string({'q': "it's (a) *test*!"}),
            'q=it%27s%20%28a%29%20%2Atest%2A%21'
        )

    def test_unreserved_characters_kept(self) -> None:
        self.assertEqual(canonical_query_string({'v': 'AZaz09-_.~'}), 'v=AZaz09-_.~')

    def test_non_string_values(self) -> None:
        self.assertEqual(
            canonical_query_string({'n': 1, 'b': True, 'z': None}),
            'b=true&n=1&z=null'
        )

    def test_utf8_values(self) -> None:
        self.assertEqual(canonical_query_string({'name': 'café'}), 'name=caf%C3%A9')

    def test_no_trailing_separator(self) -> None:
        self.assertFalse(canonical_query_string({'a': '1', 'b': '2'}).endswith('&'))


class TestEncoding(unittest.TestCase):

    def test_component_escapes_slash_and_space(self) -> None:
        self.assertEqual(uri_encode_component('a/b c'), 'a%2Fb%20c')

    def test_path_keeps_slashes(self) -> None:
        self.assertEqual(uri_encode_path('/dev/foo/bar'), '/dev/foo/bar')

    def test_path_escapes_spaces_and_utf8(self) -> None:
        self.assertEqual(uri_encode_path('/dev/my file/café'), '/dev/my%20file/caf%C3%A9')

    def test_path_keeps_uri_delimiters(self) -> None:
        self.assertEqual(uri_encode_path("/a:b@c;d,e=f+g$h&i!j*k'l(m)"), "/a:b@c;d,e=f+g$h&i!j*k'l(m)")

    def test_path_escapes_percent(self) -> None:
        self.assertEqual(uri_encode_path('/my%20file'), '/my%2520file')


class TestHeaders(unittest.TestCase):
    HEADERS = {
        'x-amz-date': '20231215T120000Z',
        'Host': 'example.com',
        'Accept': 'application/json',
    }

    def test_canonical_headers(self) -> None:
        self.assertEqual(
            canonical_headers(self.HEADERS),
            'accept:application/json\nhost:example.com\nx-amz-date:20231215T120000Z\n'
        )

    def test_signed_headers(self) -> None:
        self.assertEqual(canonical_signed_headers(self.HEADERS), 'accept;host;x-amz-date')

    def test_signed_headers_match_canonical_headers(self) -> None:
        headers = {'Content-Type': 'a', 'X-Custom': 'b', 'accept': 'c', 'Host': 'd'}
        names = [line.split(':', 1)[0] for line in canonical_headers(headers).splitlines()]

        self.assertEqual(canonical_signed_headers(headers), ';'.join(names))
        self.assertEqual(names, sorted(set(names)))

    def test_case_collisions_are_merged(self) -> None:
        headers = {'X-Foo': 'a', 'x-foo': 'b'}

        self.assertEqual(canonical_headers(headers), 'x-foo:a,b\n')
        self.assertEqual(canonical_signed_headers(headers), 'x-foo')

    def test_empty(self) -> None:
        self.assertEqual(canonical_headers({}), '')
        self.assertEqual(canonical_signed_headers({}), '')


class TestCanonicalRequest(unittest.TestCase):

    def test_layout(self) -> None:
        result = canonical_request(
            'GET',
            '/dev/my items',
            {'b': '2', 'a': '1'},
            {'Host': 'example.com', 'Accept': 'application/json'},
            ''
        )

        self.assertEqual(
            result,
            'GET\n'
            '/dev/my%20items\n'
            'a=1&b=2\n'
            'accept:application/json\n'
            'host:example.com\n'
            '\n'
            'accept;host\n'
            + EMPTY_SHA256_HASH
        )

    def test_no_trailing_newline(self) -> None:
        result = canonical_request('POST', '/', {}, {'Host': 'example.com'}, '{}')

        self.assertFalse(result.endswith('\n'))
        self.assertEqual(
            result.split('\n')[-1],
            '44136fa355b3678a1146ad16f7e8649e94fb4fc21fe77e8310c060f61caaff8a'
        )


if __name__ == '__main__':
    unittest.main(verbosity=2)
