"""
Dev Guardian - keeps a JavaScript/TypeScript project's scaffolding in line.

Checks governed config files (tsconfig.json, .gitignore, .prettierrc,
eslint.config.js) against canonical content and repairs drift, validates
required dependencies, README presence and JSDoc coverage, then runs the
formatter and linter.
"""

__version__ = "1.0.0"
