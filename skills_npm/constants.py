"""Shared constants for skills-npm."""

TARGET_PREFIX = "npm-"

NODE_MODULES = "node_modules"
PACKAGE_JSON = "package.json"
SKILLS_DIR = "skills"
SKILL_MD = "SKILL.md"

# Lock files in priority order; the first one found is fingerprinted
BINARY_LOCK_FILES = ("bun.lockb",)
TEXT_LOCK_FILES = ("package-lock.json", "pnpm-lock.yaml", "yarn.lock")
LOCK_FILES = BINARY_LOCK_FILES + TEXT_LOCK_FILES

# Relative to the scanned root
CACHE_DIR = "node_modules/.cache/skills-npm"
CACHE_FILE = "scan-cache.json"

# Marker files that identify a workspace root
WORKSPACE_ROOT_FILES = ("pnpm-workspace.yaml", "lerna.json")

# Directories never descended into when looking for nested packages
IGNORED_DIRS = ("node_modules", "dist", "build", ".git")

DEPENDENCY_FIELDS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)

SOURCE_NODE_MODULES = "node_modules"
SOURCE_PACKAGE_JSON = "package.json"
SOURCES = (SOURCE_NODE_MODULES, SOURCE_PACKAGE_JSON)

GITIGNORE_PATTERN = "skills/npm-*"
GITIGNORE_COMMENT = "# Agent skills from npm packages (managed by skills-npm)"

CONFIG_FILES = (
    "skills-npm.config.yaml",
    "skills-npm.config.yml",
    "skills-npm.config.json",
)
