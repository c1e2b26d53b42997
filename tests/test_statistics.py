import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
import unittest

from keycollection import BaseCollection, Statistics

class TestStatistics(unittest.TestCase):
    def setUp(self):
        self.collection = BaseCollection(clock=lambda: 12.5)
        self.collection.set('keyA', 'value a')
        self.collection.set(['keyB', 'keyB2'], 'value b')
        self.collection.set('keyA', 'value a2')

    def test_get_slot(self):
        content = Statistics.get_slot(self.collection, 1)
        self.assertIn("槽位：1", content)
        self.assertIn("'value b'", content)
        self.assertIn("'keyB'", content)
        self.assertIn("'keyB2'", content)

    def test_get_orphan_slot(self):
        content = Statistics.get_slot(self.collection, 0)
        self.assertIn("相关key：无", content)

    def test_get_missing_slot(self):
        self.assertIn("不存在", Statistics.get_slot(self.collection, 9))

    def test_summary(self):
        content = Statistics.summary(self.collection)
        self.assertIn("状态：ACTIVE", content)
        self.assertIn("槽位数：3", content)
        self.assertIn("key数：3", content)
        self.assertIn("别名数：1", content)
        self.assertIn("无key槽位：1", content)
        self.assertIn("时间戳：12.500", content)

    def test_summary_after_destroy(self):
        self.collection.destroy()
        self.assertEqual(Statistics.summary(self.collection), "状态：已销毁\n")

if __name__ == '__main__':
    unittest.main()
