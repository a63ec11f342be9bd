from dpm_cluster import (
    Config, DirichletClusterer, NormalPrior, NormalModelDistribution,
    PointCollector, RunLogger, make_base_path, emit_points, summarize_samples,
)
import numpy as np
# =========================
# Example usage
# =========================
if __name__ == "__main__":

    # Two well separated groups in 2-D, clustered with 10 candidate components
    rng = np.random.default_rng(0)
    points = np.vstack([
        rng.normal([0.0, 0.0], 0.5, size=(60, 2)),
        rng.normal([4.0, 4.0], 0.5, size=(60, 2)),
    ])

    cfg = Config(num_clusters=10, rng=1, alpha0=1.0, burnin=20, thin=5, num_iterations=100)
    prior = NormalPrior(mean=2.0, precision_scale=0.01, shape=3.0, scale=0.5, dimension=2)
    factory = NormalModelDistribution(prior, seed=2)

    # mirrors console & logging output into <base>.log
    with RunLogger(make_base_path("")):
        clusterer = DirichletClusterer(list(points), factory, cfg)
        samples = clusterer.cluster()

        summary = summarize_samples(samples)
        print(f"Active clusters: {summary.mean_active:.2f} ± {summary.std_active:.2f}")

        sink = PointCollector()
        emit_points(points, clusterer.state.clusters, cfg.emit_policy, sink)
        for k, members in sorted(sink.by_cluster().items()):
            print(f"cluster {k}: {len(members)} points, model={clusterer.state.clusters[k].model}")
