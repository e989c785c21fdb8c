import io
import os
import json
import unittest
import contextlib
from unittest import mock
import cryptovote
from cryptovote import __main__ as cli


def run(*argv):
    f = io.StringIO()
    with contextlib.redirect_stdout(f):
        code = cli.main(list(argv))
    return code, f.getvalue()


class CommandLine(unittest.TestCase):

    def test_version(self):
        code, out = run('-V')
        self.assertEqual(code, 0)
        self.assertIn(cryptovote.__version__, out)

    def test_report(self):
        code, out = run('-C', '3', '-k', '20', '-n', '12', '-K', '128', '--seed', '6',
                        '--decrypt', '0', '--decrypt', '11')
        self.assertEqual(code, 0)
        self.assertIn('SUCCESS', out)
        self.assertIn('"FName_0 LName_0"', out)
        self.assertIn('"FName_11 LName_11"', out)
        self.assertEqual(out.count('Passed'), 3)

    def test_json(self):
        code, out = run('-C', '2', '-k', '5', '-n', '4', '-K', '128', '--seed', '7',
                        '--cipher', 'des', '-W', '2', '--json', '--ballots', '--decrypt', '1')
        self.assertEqual(code, 0)
        obj = json.loads(out)
        self.assertEqual(obj['cipher'], 'des')
        self.assertEqual(sum(obj['counts']), 4)
        self.assertTrue(obj['verified'])
        self.assertEqual(len(obj['ballots']), 4)
        self.assertEqual(obj['decrypted'][0]['pii'], 'FName_1 LName_1')

    def test_seeded_reproducible(self):
        argv = ('-C', '3', '-k', '10', '-n', '5', '-K', '128', '--seed', '8', '--json')
        self.assertEqual(run(*argv), run(*argv))

    def test_abort(self):
        with self.assertLogs(level='ERROR'):
            code, _ = run('-C', '3', '-k', '999', '-n', '10', '-K', '16', '--seed', '9')
        self.assertEqual(code, 1)

    def test_overflow_exit_code(self):
        with self.assertLogs(level='WARNING'):
            code, out = run('-C', '1', '-k', '1', '-n', '2', '-K', '128', '--seed', '1')
        self.assertEqual(code, 2)
        self.assertIn('not decoded', out)
        self.assertIn('FAILED', out)

        with self.assertLogs(level='WARNING'):
            code, out = run('-C', '1', '-k', '1', '-n', '2', '-K', '128', '--seed', '1', '--json')
        self.assertEqual(code, 2)
        obj = json.loads(out)
        self.assertIsNone(obj['counts'])
        self.assertFalse(obj['verified'])

    def test_environment(self):
        with mock.patch.dict(os.environ, {'CRYPTOVOTE_KEYSIZE': '128',
                                          'CRYPTOVOTE_MAXWORKERS': '2'}):
            code, out = run('-C', '2', '-k', '5', '-n', '3', '--seed', '10', '--json')
        self.assertEqual(code, 0)
        self.assertLessEqual(len(json.loads(out)['n']), 32)

        with contextlib.redirect_stderr(io.StringIO()) as f:
            for env in ({'CRYPTOVOTE_KEYSIZE': 'big'}, {'CRYPTOVOTE_MAXWORKERS': '2.5'}):
                with mock.patch.dict(os.environ, env):
                    with self.assertRaises(SystemExit):
                        cli.main(['-n', '1'])
        self.assertIn('is not an integer', f.getvalue())

    def test_bad_args(self):
        with contextlib.redirect_stderr(io.StringIO()):
            for argv in (['-C', '0'], ['-k', '-1'], ['-n', '-1'], ['-K', '8'], ['-W', '-1'],
                         ['-n', '2', '--decrypt', '2'], ['--cipher', 'rc4']):
                with self.assertRaises(SystemExit):
                    cli.main(argv)


if __name__ == "__main__":
    unittest.main()
