"""sbatch_submit - render and submit single SLURM batch jobs from the command
line.

Example usage:
    sbatch-submit -j demo -n 2 -N 4 -t 2:00:00 -m 20G "python train.py"
    sbatch-submit --dryrun -j demo "echo hi" "module load python"
"""

__version__ = "1.2.0"

__all__ = ["__version__"]
