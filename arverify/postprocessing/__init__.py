from .clusters import PRIORITY_LABELS, clusters_to_frame, filter_clusters, summarize_clusters

__all__ = ['PRIORITY_LABELS', 'clusters_to_frame', 'filter_clusters', 'summarize_clusters']
