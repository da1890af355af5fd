"""
どこで: `api.sketch_runner`。
何を: `api.visualizer` から切り出した設定解決/描画初期化ヘルパ。
"""
