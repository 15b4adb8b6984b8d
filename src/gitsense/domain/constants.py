from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the parsing alphabet (tree glyphs and decorative icons),
scaffold defaults, marker-file conventions and the built-in sample
structure shown to first-time users.
"""

from typing import Tuple

APP_VERSION = "1.2.0"
CURRENT_CONFIG_VERSION = "1.2.0"

# -----------------------------------------------------------------------------
# PARSER ALPHABET
# -----------------------------------------------------------------------------

# Box-drawing connectors used by `tree` style listings
TREE_GLYPHS = "│├└─"

# Characters per indentation level once connectors are normalized
DEFAULT_INDENT_WIDTH = 2

# Decorative icons pasted from GitHub listings or chat answers
DECORATIVE_ICONS: Tuple[str, ...] = (
    "📁", "📄", "🗂️", "📋", "📊", "⚙️", "🏗️", "📦", "💡", "🎯",
    "🔧", "🎨", "🚀", "📈", "📉", "🔥", "💰", "🎪", "🏆", "✨",
    "📝", "🔍", "⭐", "🌟", "💫", "⚡", "🎊", "🎉", "🎈",
)

# -----------------------------------------------------------------------------
# SCAFFOLD DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_PROJECT_NAME = "my-project"
ARCHIVE_EXTENSION = ".zip"
DEFAULT_COMPRESSION_LEVEL = 6

GITKEEP_NAME = ".gitkeep"
GITKEEP_CONTENT = "# This file ensures the empty directory is created\n"

GENERATOR_SIGNATURE = "Generated by GitSense Folder Structure Generator"

# -----------------------------------------------------------------------------
# GITHUB COLLABORATOR
# -----------------------------------------------------------------------------

DEFAULT_GITHUB_DEPTH = 3
GITHUB_ITEMS_PER_DIR = 20

# -----------------------------------------------------------------------------
# SAMPLE INPUT
# -----------------------------------------------------------------------------

SAMPLE_STRUCTURE = """my-nextjs-app/
├── README.md
├── package.json
├── next.config.js
├── tailwind.config.js
├── tsconfig.json
├── .gitignore
├── .env.example
│
├── public/
│   ├── favicon.ico
│   ├── images/
│   │   ├── logo.svg
│   │   └── hero-bg.jpg
│   └── icons/
│       └── arrow.svg
│
├── app/
│   ├── layout.tsx
│   ├── page.tsx
│   ├── globals.css
│   ├── loading.tsx
│   │
│   ├── about/
│   │   └── page.tsx
│   │
│   ├── blog/
│   │   ├── page.tsx
│   │   └── [slug]/
│   │       └── page.tsx
│   │
│   └── api/
│       └── contact/
│           └── route.ts
│
├── components/
│   ├── ui/
│   │   ├── Button.tsx
│   │   ├── Card.tsx
│   │   └── Modal.tsx
│   │
│   └── layout/
│       ├── Header.tsx
│       ├── Footer.tsx
│       └── Navigation.tsx
│
├── lib/
│   ├── utils.ts
│   └── api.ts
│
└── types/
    └── global.ts"""
