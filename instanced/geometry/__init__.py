"""Mesh generation."""

from instanced.geometry.mesh import MeshData, create_circle_vertices, mesh_bytes, triangle_vertices

__all__ = ["MeshData", "create_circle_vertices", "mesh_bytes", "triangle_vertices"]
