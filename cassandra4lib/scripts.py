#
# Copyright 2025 Telefonaktiebolaget LM Ericsson
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

import logging
import re
from collections import namedtuple

from cassandra4lib.errors import ScriptParseError

logger = logging.getLogger(__name__)

DEFAULT_STATEMENT_SEPARATOR = ";"
FALLBACK_STATEMENT_SEPARATOR = "\n"
LINE_COMMENT_PREFIXES = ("--", "//")
BLOCK_COMMENT_START = "/*"
BLOCK_COMMENT_END = "*/"
DOLLAR_QUOTE = "$$"

BATCH_START_PATTERN = re.compile(r"^BEGIN\s+((UNLOGGED|COUNTER)\s+)?BATCH\b", re.IGNORECASE)
BATCH_END_PATTERN = re.compile(r"\bAPPLY\s+BATCH$", re.IGNORECASE)

ScriptStatement = namedtuple("ScriptStatement", ["index", "line_number", "text"])


def _in_open_batch(text):
    return BATCH_START_PATTERN.match(text) is not None and BATCH_END_PATTERN.search(text) is None


def split_statements(script, separator=DEFAULT_STATEMENT_SEPARATOR, script_path=None):
    """
    Split a CQL script into statements.

    Comments are dropped, whitespace outside of quoted text is collapsed and blank statements
    are skipped. Separators inside quotes, $$ bodies and BEGIN ... APPLY BATCH blocks do not
    end a statement. A script without any separator is split per line.
    """
    # pylint: disable=too-many-branches, too-many-statements
    if separator not in script:
        separator = FALLBACK_STATEMENT_SEPARATOR

    statements = []
    buf = []
    line_number = 1
    start_line = None
    in_single_quote = False
    in_double_quote = False
    in_dollar_quote = False
    in_escape = False
    quote_line = None
    i = 0

    def flush():
        text = "".join(buf).strip()
        if text:
            statements.append(ScriptStatement(len(statements), start_line, text))
        del buf[:]

    while i < len(script):
        c = script[i]
        quoted = in_single_quote or in_double_quote or in_dollar_quote

        if in_escape:
            in_escape = False
        elif c == "\\" and (in_single_quote or in_double_quote):
            in_escape = True
        elif c == "'" and not in_double_quote and not in_dollar_quote:
            in_single_quote = not in_single_quote
            quote_line = line_number
        elif c == '"' and not in_single_quote and not in_dollar_quote:
            in_double_quote = not in_double_quote
            quote_line = line_number
        elif script.startswith(DOLLAR_QUOTE, i) and not in_single_quote and not in_double_quote:
            in_dollar_quote = not in_dollar_quote
            quote_line = line_number
            if start_line is None:
                start_line = line_number
            buf.append(DOLLAR_QUOTE)
            i += len(DOLLAR_QUOTE)
            continue
        elif not quoted:
            if script.startswith(separator, i):
                if _in_open_batch("".join(buf).strip()):
                    buf.append(separator)
                else:
                    flush()
                    start_line = None
                if separator == FALLBACK_STATEMENT_SEPARATOR:
                    line_number += 1
                i += len(separator)
                continue

            if script.startswith(LINE_COMMENT_PREFIXES, i):
                end = script.find("\n", i)
                i = len(script) if end < 0 else end
                continue

            if script.startswith(BLOCK_COMMENT_START, i):
                end = script.find(BLOCK_COMMENT_END, i + len(BLOCK_COMMENT_START))
                if end < 0:
                    raise ScriptParseError(
                        "Missing block comment end delimiter [{0}] (line {1})".format(BLOCK_COMMENT_END, line_number),
                        script_path,
                        line_number,
                    )
                line_number += script.count("\n", i, end)
                if buf and buf[-1] != " ":
                    buf.append(" ")
                i = end + len(BLOCK_COMMENT_END)
                continue

            if c in " \t\r\n":
                if c == "\n":
                    line_number += 1
                if buf and buf[-1] != " ":
                    buf.append(" ")
                i += 1
                continue

        if start_line is None and not c.isspace():
            start_line = line_number
        buf.append(c)
        if c == "\n":
            line_number += 1
        i += 1

    if in_single_quote or in_double_quote or in_dollar_quote:
        raise ScriptParseError("Unterminated quoted text starting at line {0}".format(quote_line), script_path, quote_line)

    flush()
    return statements


def execute_database_script(delegate, script_path, script, continue_on_error=False, ignore_failed_drops=False):
    statements = split_statements(script, script_path=script_path)
    logger.info(f"Executing database script {script_path} ({len(statements)} statements)")
    delegate.execute(statements, script_path, continue_on_error=continue_on_error, ignore_failed_drops=ignore_failed_drops)
    logger.info(f"Executed database script {script_path}")
