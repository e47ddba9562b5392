"""trainchinese: spaced-repetition trainer for Chinese vocabulary."""

VERSION = "0.3.0"
