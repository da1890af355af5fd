"""
どこで: `util` パッケージ。
何を: 設定ファイル読込・色正規化・定数など、ドメインを持たない補助関数群。
"""
