"""Command-line entry point: load a point file, cluster it, print the clusters."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from cluster_analysis.agglomerative_clustering import (
    ClusteringConfig,
    ConfigurationError,
    agglomerate,
    linkage_matrix,
)
from cluster_analysis.distance import DEFAULT_LINKAGE
from cluster_analysis.formatters import write_clusters
from cluster_analysis.loaders import INTEGER, LoadError, load_clusters

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def positive_int(value: str) -> int:
    if INTEGER.fullmatch(value) is None:
        raise argparse.ArgumentTypeError(f"invalid cluster count '{value}'")
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"cluster count must be positive, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cluster-analysis",
        description="Agglomerative clustering of 2-D points (unweighted pair-group average by default).",
    )
    parser.add_argument("file", help="Point file: 'count=N' followed by N lines of '<id> <x> <y>'.")
    parser.add_argument(
        "n_clusters",
        nargs="?",
        type=positive_int,
        default=None,
        help="Target number of clusters (default: 1).",
    )
    linkage = parser.add_mutually_exclusive_group()
    linkage.add_argument(
        "--min",
        dest="linkage",
        action="store_const",
        const="single",
        help="Single linkage: cluster distance is the closest pair of points.",
    )
    linkage.add_argument(
        "--max",
        dest="linkage",
        action="store_const",
        const="complete",
        help="Complete linkage: cluster distance is the farthest pair of points.",
    )
    parser.add_argument("--plot", metavar="PATH", help="Save a scatter plot of the final clusters.")
    parser.add_argument(
        "--dendrogram",
        metavar="PATH",
        help="Save a dendrogram of the merge history (requires a target of 1 cluster).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-v for info, -vv for debug).",
    )
    parser.set_defaults(linkage=None)
    return parser


def configure_logging(verbosity: int) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS.get(verbosity, logging.DEBUG),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def check_figure_path(path: str) -> None:
    from cluster_analysis.plotting import supported_formats

    suffix = Path(path).suffix.lower().lstrip(".")
    if suffix and suffix not in supported_formats():
        raise ConfigurationError(f"Unsupported figure format '{suffix}' for {path}.")


def build_config(args: argparse.Namespace) -> ClusteringConfig:
    if args.n_clusters is None:
        # the linkage flag is only honoured together with an explicit count
        if args.linkage is not None:
            logger.warning("Ignoring linkage option without a cluster count; using average linkage")
        return ClusteringConfig(n_clusters=1, linkage=DEFAULT_LINKAGE)
    return ClusteringConfig(n_clusters=args.n_clusters, linkage=args.linkage or DEFAULT_LINKAGE)


def run(args: argparse.Namespace) -> int:
    try:
        config = build_config(args)
        config.validate()
        if args.dendrogram and config.n_clusters != 1:
            raise ConfigurationError("--dendrogram requires a target of 1 cluster.")
        for path in (args.plot, args.dendrogram):
            if path:
                check_figure_path(path)
        clusters = load_clusters(args.file)
        initial_ids = [str(point_id) for point_id in clusters.ids().tolist()]
        result = agglomerate(clusters, config)
    except (LoadError, ConfigurationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    write_clusters(result.clusters, sys.stdout)

    try:
        if args.plot:
            from cluster_analysis.plotting import save_cluster_plot

            save_cluster_plot(result.clusters, args.plot)
            logger.info(f"Wrote cluster plot to {args.plot}")
        if args.dendrogram:
            Z = linkage_matrix(result)
            if len(Z) == 0:
                logger.warning("Nothing to draw in a dendrogram for a single point")
            else:
                from cluster_analysis.plotting import save_dendrogram

                save_dendrogram(Z, args.dendrogram, labels=initial_ids)
                logger.info(f"Wrote dendrogram to {args.dendrogram}")
    except (OSError, ValueError) as exc:
        print(f"error: cannot write figure: {exc}", file=sys.stderr)
        return EXIT_ERROR
    finally:
        result.clusters.clear()

    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
