"""
どこで: `engine.render` サブパッケージ。
何を: 折れ線 → GPU 転送・描画の入口。PathRenderer/LineMesh/Shader を提供。
なぜ: 計算（curves）と描画の責務を分離し、GPU リソース管理を局所化するため。
"""
