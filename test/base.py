from aibs_informatics_test_resources import BaseTest, does_not_raise

__all__ = ["BaseTest", "does_not_raise"]
