"""
Centralized constants for pomconf.

This module defines immutable configuration values used across pomconf,
including the standard configuration set, the packaging tables, the
extra-info key scheme, network settings and logging formats. All values
are intended to be treated as read-only.
"""

from typing import Final, FrozenSet, Mapping, Sequence, Tuple
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

#: HTTP User-Agent template used for outbound requests.
USER_AGENT_TEMPLATE: Final[str] = "pomconf/{version}"

# ---------------------------------------------------------------------------
# Maven namespace
# ---------------------------------------------------------------------------

#: Namespace URI for Maven specific attributes in an ivy-style descriptor.
MAVEN_NAMESPACE_URI: Final[str] = "http://ant.apache.org/ivy/maven"

#: Prefix bound to :data:`MAVEN_NAMESPACE_URI`.
MAVEN_NAMESPACE_PREFIX: Final[str] = "m"

#: Extra attribute carrying an artifact classifier.
CLASSIFIER_ATTRIBUTE: Final[str] = "m:classifier"

# ---------------------------------------------------------------------------
# Scopes and configurations
# ---------------------------------------------------------------------------

#: Scope used when a declaration omits it or names an unknown one.
DEFAULT_SCOPE: Final[str] = "compile"

#: Configuration that collects optional dependencies.
OPTIONAL_CONFIGURATION: Final[str] = "optional"

#: Configuration holding the module's own published artifact.
MASTER_CONFIGURATION: Final[str] = "master"

#: Configuration holding source artifacts.
SOURCES_CONFIGURATION: Final[str] = "sources"

#: Configuration holding javadoc artifacts.
JAVADOC_CONFIGURATION: Final[str] = "javadoc"

#: The ten standard configurations as ``(name, extends, description)``.
STANDARD_CONFIGURATIONS: Final[Sequence[Tuple[str, Tuple[str, ...], str]]] = (
    (
        "default",
        ("runtime", "master"),
        "runtime dependencies and master artifact can be used with this conf",
    ),
    (
        "master",
        (),
        "contains only the artifact published by this module itself, "
        "with no transitive dependencies",
    ),
    (
        "compile",
        (),
        "this is the default scope, used if none is specified. "
        "Compile dependencies are available in all classpaths.",
    ),
    (
        "provided",
        (),
        "this is much like compile, but indicates you expect the JDK or a "
        "container to provide it. It is only available on the compilation "
        "classpath, and is not transitive.",
    ),
    (
        "runtime",
        ("compile",),
        "this scope indicates that the dependency is not required for "
        "compilation, but is for execution. It is in the runtime and test "
        "classpaths, but not the compile classpath.",
    ),
    (
        "test",
        ("runtime",),
        "this scope indicates that the dependency is not required for normal "
        "use of the application, and is only available for the test "
        "compilation and execution phases.",
    ),
    (
        "system",
        (),
        "this scope is similar to provided except that you have to provide "
        "the JAR which contains it explicitly. The artifact is always "
        "available and is not looked up in a repository.",
    ),
    (
        "sources",
        (),
        "this configuration contains the source artifact of this module, if any.",
    ),
    (
        "javadoc",
        (),
        "this configuration contains the javadoc artifact of this module, if any.",
    ),
    (
        "optional",
        (),
        "contains all optional dependencies",
    ),
)

# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------

#: Version suffix marking a pre-release build.
SNAPSHOT_SUFFIX: Final[str] = "SNAPSHOT"

#: Status of modules with a pre-release (or missing) version.
STATUS_INTEGRATION: Final[str] = "integration"

#: Status of every other module.
STATUS_RELEASE: Final[str] = "release"

# ---------------------------------------------------------------------------
# Packaging and artifact types
# ---------------------------------------------------------------------------

#: Packagings whose artifact is published with a ``.jar`` extension.
JAR_PACKAGINGS: Final[FrozenSet[str]] = frozenset(
    {
        "ejb",
        "bundle",
        "maven-plugin",
        "eclipse-plugin",
        "jbi-component",
        "jbi-shared-library",
        "orbit",
        "hk2-jar",
    }
)

#: Packagings mapped to an extension other than their own name.
PACKAGING_EXTENSIONS: Final[Mapping[str, str]] = MappingProxyType({"pear": "phar"})

#: Packaging that publishes no artifact of its own.
POM_PACKAGING: Final[str] = "pom"

#: Default artifact type and extension.
JAR_TYPE: Final[str] = "jar"

#: Dependency type denoting a module's attached test jar.
TEST_JAR_TYPE: Final[str] = "test-jar"

#: Classifier implied by :data:`TEST_JAR_TYPE`.
TESTS_CLASSIFIER: Final[str] = "tests"

# ---------------------------------------------------------------------------
# Extra-info key scheme
# ---------------------------------------------------------------------------

#: Tag prefixing dependency-management entries.
DEPENDENCY_MANAGEMENT_TAG: Final[str] = "m:dependency.management"

#: Tag prefixing property entries.
PROPERTIES_TAG: Final[str] = "m:properties"

#: Name of the single entry listing plugins.
PLUGINS_TAG: Final[str] = "m:maven.plugins"

#: Separator between the fields of an encoded key or value.
EXTRA_INFO_DELIMITER: Final[str] = "__"

#: Separator between plugins in the plugins entry.
PLUGIN_SEPARATOR: Final[str] = "|"

#: Number of parts in a dependency-management key.
DEPENDENCY_MANAGEMENT_KEY_PARTS: Final[int] = 5

#: Token written for a missing classifier or plugin version.
NULL_TOKEN: Final[str] = "null"

#: Wildcard used in exclusion patterns.
WILDCARD: Final[str] = "*"

# ---------------------------------------------------------------------------
# Repository access
# ---------------------------------------------------------------------------

#: Repository probed for the implicit jar of ``pom`` packaged modules.
DEFAULT_REPOSITORY_URL: Final[str] = "https://repo1.maven.org/maven2"

#: Default network timeout in seconds.
DEFAULT_TIMEOUT: Final[int] = 30

#: Maximum number of retries for failed HTTP requests.
DEFAULT_MAX_RETRIES: Final[int] = 3

#: Whether ``pom`` packaged modules are probed for an implicit jar.
DEFAULT_PROBE_POM_ARTIFACTS: Final[bool] = True

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading record documents.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
