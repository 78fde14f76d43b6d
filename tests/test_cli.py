import io
import os
import shutil
import tempfile
import unittest
from unittest import mock

from arscparser import values
from arscparser.cli import main
from arscparser.entries import FLAG_PUBLIC
from tests import arsc_builder as ab


def _sample_table(res0=0):
    chunks = [
        ab.type_spec(1, 2),
        ab.type_chunk(1, [(0, ab.simple_entry(0, values.TYPE_STRING, 0, flags=FLAG_PUBLIC, res0=res0)),
                          (1, ab.simple_entry(1, values.TYPE_INT_DEC, 7))]),
        ab.type_chunk(1, [(0, ab.simple_entry(0, values.TYPE_STRING, 1))], cfg=ab.config(language=b'fr')),
    ]
    return ab.table(['Hello', 'Bonjour'], [ab.package(0x7f, 'com.example', ['string'], ['app_name', 'count'],
                                                      chunks)])


class CliTest(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def _write(self, raw):
        path = os.path.join(self.tmp_dir, 'resources.arsc')
        with open(path, 'wb') as fd:
            fd.write(raw)
        return path

    def _run(self, argv):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as out:
            code = main(argv)
        return code, out.getvalue()

    def testDump(self):
        code, out = self._run([self._write(_sample_table())])
        self.assertEqual(0, code)
        self.assertEqual([
            'Package 0x7f com.example',
            '  Type string (0x01)',
            '    config default',
            '      0x7f010000 app_name = Hello',
            '      0x7f010001 count = 7',
            '    config fr',
            '      0x7f010000 app_name = Bonjour',
        ], out.splitlines())

    def testStrings(self):
        path = self._write(_sample_table())
        code, out = self._run([path, '--strings', ''])
        self.assertEqual(0, code)
        self.assertIn('<string name="app_name">Hello</string>', out)

        code, out = self._run([path, '--strings', 'fr'])
        self.assertIn('<string name="app_name">Bonjour</string>', out)
        self.assertNotIn('Hello', out)

    def testPublic(self):
        code, out = self._run([self._write(_sample_table()), '--public', ''])
        self.assertEqual(0, code)
        self.assertIn('<public type="string" name="app_name" id="0x7f010000" />', out)
        self.assertNotIn('count', out)

    def testStrictFailureAndLenient(self):
        path = self._write(_sample_table(res0=1))
        with self.assertLogs('arscparser.runtime', level='ERROR'):
            code, out = self._run([path])
        self.assertEqual(1, code)
        self.assertEqual('', out)

        with self.assertLogs('arscparser.runtime', level='ERROR'):
            code, out = self._run([path, '--lenient'])
        self.assertEqual(0, code)
        self.assertIn('app_name = Bonjour', out)

    def testMissingFile(self):
        with self.assertLogs('arscparser.runtime', level='ERROR'):
            code, _ = self._run([os.path.join(self.tmp_dir, 'missing.arsc')])
        self.assertEqual(1, code)


if __name__ == '__main__':
    unittest.main()
