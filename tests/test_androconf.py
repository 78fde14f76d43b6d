import logging
import unittest

from arscparser import androconf


class AndroconfTest(unittest.TestCase):
    def setUp(self):
        self.level = androconf.log_andro.level

    def tearDown(self):
        androconf.log_andro.setLevel(self.level)

    def testDefaults(self):
        self.assertTrue(androconf.CONF["STRICT_MODE"])
        self.assertEqual(2048, androconf.CONF["BLOCK_SIZE"])
        self.assertEqual(logging.WARNING, androconf.log_andro.level)
        self.assertFalse(androconf.get_debug())

    def testSwitches(self):
        androconf.set_debug()
        self.assertTrue(androconf.get_debug())
        androconf.set_info()
        self.assertFalse(androconf.get_debug())
        self.assertEqual(logging.INFO, androconf.log_andro.getEffectiveLevel())

    def testHelpersLogOnRuntimeLogger(self):
        with self.assertLogs('arscparser.runtime', level='INFO') as logs:
            androconf.info('one')
            androconf.warning('two')
            androconf.error('three')
        self.assertEqual(['INFO:arscparser.runtime:one', 'WARNING:arscparser.runtime:two',
                          'ERROR:arscparser.runtime:three'], logs.output)


if __name__ == '__main__':
    unittest.main()
