"""
どこで: `engine` パッケージ。
何を: フレーム駆動/ビューポート（core）、GPU 描画（render）、コントロール面（ui）。
なぜ: 曲線ドメイン（curves）から描画/GUI 依存を切り離すため。
"""
