# SPDX-License-Identifier: Apache-2.0
"""Korean-to-21-language i18n export translator.

Translates short Korean UI strings into a fixed set of languages with a
single structured LLM request per batch, and exports the result as a
table, JSON or tab-separated text.
"""

__version__ = "0.1.0"
