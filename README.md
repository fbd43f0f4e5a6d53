# numberlib

numberlib keeps a small library of numbers. Each number comes with a link to
a web page that shows the SMS messages that number has received. numberlib
polls the link and uses a regular expression to pick the verification code
out of the page. It accepts a code only after it has seen the same code a
configured number of times in a row.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
numberlib [--data PATH] [--config PATH] COMMAND ...
```

`--data` sets the data file and defaults to `NumberLibrary.dat`. `--config`
sets the configuration file and defaults to `NumberLibrary.cfg`. Both are
relative to the current directory.

Records are addressed by their position, counting from 1, as `list` shows it.

| Command | What it does |
| --- | --- |
| `list` | Prints one line per record, tab-separated: position, number, code, link, remark. |
| `import FILE` | Imports the lines of a text file, saves the data file and reports what was imported and what failed. |
| `remark INDEX TEXT` | Sets a record's remark and saves. |
| `delete INDEX` | Deletes one record and saves. |
| `clear` | Deletes all records and saves. It fails if the library is already empty. |
| `open INDEX` | Opens the record's link in the web browser. `http://` is added if the link has no scheme. |
| `fetch INDEX [--max-rounds N] [--timeout SECONDS]` | Polls the record's link and prints the progress after each fetch. See below. |
| `test-regex [CONTENT]` | Runs the verification-code pattern over `CONTENT`, or over standard input if it is not given. Prints the code it finds. |
| `config [--refresh-time N] [--verify-count N] [--number-regex RE] [--verify-code-regex RE]` | Prints the settings. Any option that is given is changed and written to the configuration file. |

### How `fetch` works

`fetch` polls the link once every refresh interval. It stops when the same
code has been seen the required number of times in a row. A different code
starts the count again.

- When a code is confirmed, `fetch` stores it in the record, saves the data
  file and exits with status 0.
- When `--max-rounds` runs out, or Ctrl+C is pressed, `fetch` prints a
  stop summary and exits with status 1.

Pages that cannot be read, and pages with no code in them, are reported and
polling goes on. An invalid pattern ends the command with an error.

## Files

**Configuration** (`NumberLibrary.cfg`) holds four lines:

1. The refresh interval in seconds. Default: `3`.
2. How many identical codes in a row are needed before a code is accepted.
   Default: `3`.
3. The import pattern. Group 1 is the number and group 2 is the link.
   Default: `^([^\-]+)----([^\-]+)$`
4. The verification-code pattern. Group 1 is the code.
   Default: `(\d{6})(?=[^\d]*短信登录验证码)`

If the file is missing, the defaults are used. If lines are missing, those
settings keep their defaults. The numbers are read leniently: text that does
not start with a number reads as `0`.

**Data** (`NumberLibrary.dat`) holds each record as
`number||code||link||remark`. Records are separated by `||-||`. When the
file is read:

- line breaks in it are ignored;
- records without a field separator are skipped;
- records with an empty number are skipped;
- if a number appears more than once, only its first record is kept.

Both files are written as UTF-8. When they are read, UTF-16 with a
byte-order mark is also accepted, and GB18030 is used as a fallback.

## Import files

With the default import pattern, each line of an import file looks like
this:

```
A100----sms.example.com/inbox/a100
```

Lines are trimmed and blank lines are ignored. A line counts as failed if it
does not match the pattern or if its number is already in the library. The
first five failed lines are listed in the report.

The file's bytes are decoded the same way as fetched pages. UTF-8, the
system encoding, GBK and Big5 are tried in that order, and the first result
that does not look garbled is used.

## Using it from Python

```python
from numberlib.config import load_config
from numberlib.library import NumberLibrary
from numberlib.records import load_records, save_records

config = load_config("NumberLibrary.cfg")
library = NumberLibrary(config)
library.merge(load_records("NumberLibrary.dat"))

with open("numbers.txt", encoding="utf-8") as lines:
    result = library.import_lines(lines)
print(result.imported, result.failed, result.failed_lines)

save_records("NumberLibrary.dat", list(library))
```

The pieces are also available on their own:

- `numberlib.records`: `NumberRecord`, plus `parse_records` and
  `format_records` for the data format.
- `numberlib.extract`: `parse_import_line`, `extract_verify_code` and
  `compile_pattern`. `compile_pattern` raises `PatternError` for an empty or
  invalid pattern.
- `numberlib.fetch`: `normalize_link` and `fetch_content`. There is also
  `fetch_verify_code`, which fetches a page once and raises `FetchError`
  when it fails.
- `numberlib.encoding`: `decode_content` and `is_garbled`.
- `numberlib.verify`: `VerifyTracker`, which counts repeated codes per item
  and returns a `VerifyOutcome` for each result.

## What it does not do

- There is no graphical window. Everything is done through the command line
  or from Python.
- Nothing is copied to the clipboard. Use `list` to see numbers and codes.
- `fetch` polls one record at a time, in the foreground. It does not poll
  several records in the background.