"""Bundled dataset served before the first successful sync."""

FALLBACK_CSV: str = """\
id,title,paper_url,data_url,data_accession,kit,engineer,reviewer,status,count,notes,created_at,submitted_at,done_at
1,Fibroblast orchestration of inflammaging via NF-kB activation,https://pmc.ncbi.nlm.nih.gov/articles/PMC12622043/,https://www.ncbi.nlm.nih.gov/geo/query/acc.cgi?acc=GSE286085,GSE286085,xenium,Alex Urrutia,Kenny Workman,qc,,,2026-01-07,2026-01-17,
2,Nephron progenitors rhythmically alternate between renewal and differentiation phases that synchronize with kidney branching morphogenesis,https://pmc.ncbi.nlm.nih.gov/articles/PMC10690271/,https://www.ncbi.nlm.nih.gov/geo/query/acc.cgi?acc=GSE315435,GSE315435,xenium,Henk Shang,Kenny Workman,qc,,,2026-01-07,2026-01-17,
3,Flexible nanoelectronics reveal arrhythmogenesis in transplanted human cardiomyocytes,https://www.science.org/doi/10.1126/science.adw4612,https://www.ncbi.nlm.nih.gov/geo/query/acc.cgi?acc=GSE289054,GSE289054,curio,Alex Urrutia,Kenny Workman,qc,,first batch,2026-01-14,2026-01-24,
4,Flexible nanoelectronics reveal arrhythmogenesis in transplanted human cardiomyocytes,https://www.science.org/doi/10.1126/science.adw4612,https://www.ncbi.nlm.nih.gov/geo/query/acc.cgi?acc=GSE289054,GSE289054,curio,Alex Urrutia,Kenny Workman,qc,,second batch; difficult problems,2026-01-26,2026-01-30,
5,High resolution mapping of the tumor microenvironment using integrated single-cell spatial and in situ analysis,https://pubmed.ncbi.nlm.nih.gov/38114474/,https://www.ncbi.nlm.nih.gov/geo/query/acc.cgi?acc=GSE243280,GSE243280,xenium,Zachary Hemminger,Kenny Workman,qc,,,2026-01-26,2026-01-30,
6,The spatial transcriptomic landscape of the healing mouse intestine following damage,https://pubmed.ncbi.nlm.nih.gov/35149721/,https://www.ncbi.nlm.nih.gov/geo/query/acc.cgi?acc=GSE169749,GSE169749,visium,Nasim Rahmatpour,Kenny Workman,qc,,,2026-01-26,2026-01-30,
7,High-definition spatial transcriptomic profiling of immune cell populations in colorectal cancer,https://pmc.ncbi.nlm.nih.gov/articles/PMC12165841/,https://www.ncbi.nlm.nih.gov/geo/query/acc.cgi?acc=GSE280318,GSE280318,visium,Irene Li,Kenny Workman,qc,,,2026-01-26,2026-01-30,
8,Mapping spatial organization and genetic cell-state regulators to target immune evasion in ovarian cancer,https://www.nature.com/articles/s41590-024-01943-5,https://zenodo.org/records/12613839,12613839,merfish,Soo Hee Lee,Kenny Workman,qc,,,2026-01-26,2026-01-30,
9,High-definition spatial transcriptomic profiling of immune cell populations in colorectal cancer,https://www.nature.com/articles/s41588-025-02193-3,https://www.10xgenomics.com/datasets/ffpe-human-colorectal-cancer-data-with-human-immuno-oncology-profiling-panel-and-custom-add-on-1-standard,,xenium,Reema Baskar,Kenny Workman,qc,,,2026-01-26,2026-01-30,

"""
